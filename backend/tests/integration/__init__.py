"""
Integration Tests Package

This package contains integration tests that exercise complete flows through
the HTTP API:
- Auth flows: Sign-up, sign-in, session, sign-out, invitation acceptance
- Users: Invitation, profile updates, deletion
- Company: Company profile, details, settings, permissions and positions
- Resources: Company-scoped vehicles and equipment

Integration tests run against an in-memory SQLite database; outbound email is
disabled or mocked.
"""
