"""
Test Configuration and Fixtures

This module provides pytest fixtures and configuration for the test suite.
Fixtures are reusable test resources that can be injected into test functions.

Key fixtures:
- app: Flask application with TestingConfig and a fresh in-memory schema
- client: Flask test client for making HTTP requests
- db: Database instance bound to the app
- owner: Self-registered company owner (company and settings provisioned)
- invitee: User invited into the owner's company (no password yet)
- owner_headers / invitee_headers: Authorization headers with a session token
"""

import pytest

from adrevolution import create_app
from adrevolution.extensions import db as _db
from adrevolution.services.auth_service import AuthService
from adrevolution.services.provisioning_service import ProvisioningService
from adrevolution.services.token_service import TokenService

OWNER_PASSWORD = 'OwnerPass123'


@pytest.fixture(scope='function')
def app():
    """
    Create Flask application for testing.

    Scope: function - every test gets its own in-memory database, created
    from the models and dropped afterwards.
    """
    app = create_app('testing')

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def db(app):
    return _db


@pytest.fixture(scope='function')
def client(app):
    """Flask test client (cookies persist between its requests)."""
    return app.test_client()


@pytest.fixture(scope='function')
def owner(app):
    """
    Create a company owner through the sign-up workflow.

    Returns:
        User owning 'Acme Freight', with every dependent record provisioned
    """
    user, _ = AuthService.sign_up(
        email='owner@example.com',
        password=OWNER_PASSWORD,
        first_name='Olivia',
        last_name='Owner',
        company_name='Acme Freight'
    )
    return user


@pytest.fixture(scope='function')
def invitee(owner):
    """
    Invite a worker into the owner's company.

    Mail is disabled in TestingConfig, so the invitation is created without
    being delivered.
    """
    user, _ = ProvisioningService.invite_user(owner.id, {
        'email': 'worker@example.com',
        'first_name': 'Walter',
        'last_name': 'Worker',
        'position': 'WORKER',
        'is_admin': False,
    })
    return user


@pytest.fixture(scope='function')
def outsider(app):
    """Owner of another company."""
    user, _ = AuthService.sign_up(
        email='other@example.com',
        password='OtherPass123',
        first_name='Oscar',
        last_name='Other',
        company_name='Other Logistics'
    )
    return user


def bearer(user):
    return {'Authorization': f'Bearer {TokenService.issue(user)}'}


@pytest.fixture(scope='function')
def owner_headers(owner):
    return bearer(owner)


@pytest.fixture(scope='function')
def invitee_headers(invitee):
    return bearer(invitee)


@pytest.fixture(scope='function')
def outsider_headers(outsider):
    return bearer(outsider)


@pytest.fixture
def mock_smtp(app, mocker):
    """
    Enable mail and replace smtplib.SMTP with a mock.

    Returns:
        The SMTP instance mock used inside the 'with' block
    """
    app.config['MAIL_ENABLED'] = True
    app.config['SMTP_HOST'] = 'smtp.example.com'
    smtp_class = mocker.patch('adrevolution.services.notification_service.smtplib.SMTP')
    return smtp_class.return_value.__enter__.return_value
