"""
User and Authentication Schemas for Data Validation and Serialization

Schemas:
- SignUpSchema: Self-registration (email, password, optional names)
- SignInSchema: Email/password authentication
- VerifyAccountSchema: Password chosen when accepting an invitation
- UserUpdateSchema: Profile updates (no email, no password)
- UserInviteSchema: Administrator invitation of a new user
- UserResponseSchema: For API responses (excludes credentials)
"""

from marshmallow import Schema, fields, validate, validates, ValidationError
import re

from adrevolution.models.labour_cost import LabourCost
from adrevolution.models.user_position import UserPosition


def validate_password_strength(value):
    """
    Validate password meets security requirements.

    Requirements:
    - 8 to 72 characters (bcrypt ignores anything beyond 72 bytes)
    - At least one letter
    - At least one number
    """
    if len(value) < 8:
        raise ValidationError("Password must be at least 8 characters")

    if len(value.encode('utf-8')) > 72:
        raise ValidationError("Password must not exceed 72 bytes")

    if not re.search(r'[a-zA-Z]', value):
        raise ValidationError("Password must contain at least one letter")

    if not re.search(r'\d', value):
        raise ValidationError("Password must contain at least one number")


class ProfileFieldsMixin:
    """Optional profile fields shared by updates and invitations."""

    first_name = fields.Str(validate=validate.Length(min=1, max=100))
    last_name = fields.Str(validate=validate.Length(min=1, max=100))
    street_address = fields.Str(validate=validate.Length(max=255))
    city = fields.Str(validate=validate.Length(max=100))
    province = fields.Str(validate=validate.Length(max=100))
    postal_code = fields.Str(validate=validate.Length(max=20))
    country = fields.Str(validate=validate.Length(max=100))
    phone_number = fields.Str(validate=validate.Length(max=50))


class SignUpSchema(Schema):
    """
    Schema for self-registration.

    Used for POST /auth/sign-up.
    """
    email = fields.Email(
        required=True,
        validate=validate.Length(max=255, error="Email must not exceed 255 characters")
    )
    password = fields.Str(required=True, load_only=True, validate=validate_password_strength)
    first_name = fields.Str(validate=validate.Length(min=1, max=100))
    last_name = fields.Str(validate=validate.Length(min=1, max=100))
    company_name = fields.Str(validate=validate.Length(min=1, max=255))

    @validates('email')
    def validate_email_not_blank(self, value, **kwargs):
        if not value or not value.strip():
            raise ValidationError("Email cannot be empty")


class SignInSchema(Schema):
    """
    Schema for user sign-in.

    Used for POST /auth/sign-in. No strength rules: a wrong password is an
    authentication failure, not a validation error.
    """
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=1))


class VerifyAccountSchema(Schema):
    """Used for PATCH /auth/verify/<token>."""
    password = fields.Str(required=True, load_only=True, validate=validate_password_strength)


class UserUpdateSchema(ProfileFieldsMixin, Schema):
    """
    Schema for profile updates.

    Used for PATCH /users. All fields are optional (partial updates).
    Email and password are not part of this schema.
    """


class UserInviteSchema(ProfileFieldsMixin, Schema):
    """
    Schema for inviting a user into the caller's company.

    Used for POST /users/invite.
    """
    email = fields.Email(required=True, validate=validate.Length(max=255))
    company_id = fields.UUID()
    position = fields.Str(
        load_default=UserPosition.WORKER,
        validate=validate.OneOf(
            [name for name in UserPosition.VALID_NAMES if name != UserPosition.COMPANY_OWNER]
        )
    )
    is_admin = fields.Boolean(load_default=False)
    labour_cost = fields.Float(validate=validate.Range(min=0, max=LabourCost.MAX_LABOUR_COST))
    cost_unit = fields.Str(validate=validate.OneOf(LabourCost.VALID_UNITS))
    surveys = fields.Boolean()
    inviter_first_name = fields.Str(validate=validate.Length(max=100))
    inviter_last_name = fields.Str(validate=validate.Length(max=100))


class UserResponseSchema(Schema):
    """
    Schema for user API responses.

    Excludes password_hash and password_salt.
    """
    id = fields.UUID(dump_only=True)
    email = fields.Email(dump_only=True)
    first_name = fields.Str(dump_only=True)
    last_name = fields.Str(dump_only=True)
    street_address = fields.Str(dump_only=True)
    city = fields.Str(dump_only=True)
    province = fields.Str(dump_only=True)
    postal_code = fields.Str(dump_only=True)
    country = fields.Str(dump_only=True)
    phone_number = fields.Str(dump_only=True)
    is_active = fields.Boolean(dump_only=True)
    last_login = fields.DateTime(dump_only=True)
    position_id = fields.UUID(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    is_verified = fields.Method('get_is_verified', dump_only=True)

    def get_is_verified(self, obj):
        return obj.has_credentials()


# Pre-instantiated schemas for convenience
sign_up_schema = SignUpSchema()
sign_in_schema = SignInSchema()
verify_account_schema = VerifyAccountSchema()
user_update_schema = UserUpdateSchema()
user_invite_schema = UserInviteSchema()
user_response_schema = UserResponseSchema()
users_response_schema = UserResponseSchema(many=True)
