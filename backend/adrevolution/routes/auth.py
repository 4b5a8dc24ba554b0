"""
Authentication Blueprint.

This module handles the credential lifecycle endpoints:
- Self-registration (creates the user's company and settings)
- Sign-in / sign-out
- Session inspection
- Invitation preview and acceptance

Security features:
- Password hashing with bcrypt (salt stored per user)
- JWT access tokens (one day) delivered in the HTTP-only 'access-token'
  cookie and in the response body
- Verification tokens expire after VERIFICATION_TOKEN_TTL_HOURS
"""

import logging
from flask import Blueprint, current_app, request, g
from marshmallow import ValidationError

from adrevolution.schemas.user_schema import (
    sign_up_schema,
    sign_in_schema,
    verify_account_schema,
    user_response_schema,
)
from adrevolution.services.auth_service import AuthService
from adrevolution.services.token_service import TokenService
from adrevolution.utils.decorators import jwt_required_custom
from adrevolution.utils.responses import ok, created, validation_error, forbidden

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/sign-up', methods=['POST'])
def sign_up():
    """
    Register a new user account and provision their company.

    POST /auth/sign-up

    Request Body:
        {
            "email": "owner@example.com",
            "password": "SecurePass123",
            "first_name": "John",          // Optional
            "last_name": "Doe",            // Optional
            "company_name": "Acme Freight" // Optional
        }

    Response (201):
        {
            "success": true,
            "message": "User registered successfully",
            "data": {"user": {...}, "access_token": "eyJ..."}
        }
        Set-Cookie: access-token=eyJ...; HttpOnly

    Errors:
        - 400: Validation error (invalid email, weak password)
        - 400: email-exists
        - 403: Registration disabled
    """
    if not current_app.config.get('ENABLE_REGISTRATION', True):
        return forbidden('Registration is disabled')

    try:
        data = sign_up_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid sign-up data provided', err.messages)

    user, access_token = AuthService.sign_up(
        email=data['email'],
        password=data['password'],
        first_name=data.get('first_name'),
        last_name=data.get('last_name'),
        company_name=data.get('company_name')
    )

    response, status = created(
        {'user': user_response_schema.dump(user), 'access_token': access_token},
        'User registered successfully'
    )
    TokenService.set_session_cookie(response, access_token)
    return response, status


@auth_bp.route('/sign-in', methods=['POST'])
def sign_in():
    """
    Authenticate with email and password.

    POST /auth/sign-in

    Request Body:
        {"email": "owner@example.com", "password": "SecurePass123"}

    Response (200):
        {
            "success": true,
            "message": "Signed in successfully",
            "data": {"user": {...}, "access_token": "eyJ..."}
        }

    Errors:
        - 400: Validation error (missing email or password)
        - 401: Invalid credentials, invitation not accepted yet, inactive account
    """
    try:
        data = sign_in_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid sign-in data provided', err.messages)

    user, access_token = AuthService.sign_in(data['email'], data['password'])

    response, status = ok(
        {'user': user_response_schema.dump(user), 'access_token': access_token},
        'Signed in successfully'
    )
    TokenService.set_session_cookie(response, access_token)
    return response, status


@auth_bp.route('/sign-out', methods=['POST'])
def sign_out():
    """
    Clear the session cookie.

    POST /auth/sign-out

    No authentication required: signing out without a session is a no-op.
    Tokens are not revoked server-side and stay valid until they expire.
    """
    AuthService.sign_out()
    response, status = ok(message='Signed out successfully')
    TokenService.clear_session_cookie(response)
    return response, status


@auth_bp.route('/session', methods=['GET'])
@jwt_required_custom
def get_session():
    """
    Return the claims of the current session.

    GET /auth/session

    Response (200):
        {"success": true, "data": {"id": "uuid", "email": "...", "iat": 0, "exp": 0}}
    """
    return ok(AuthService.get_session(g.jwt_claims), 'Session retrieved successfully')


@auth_bp.route('/verify/<token>', methods=['PATCH'])
def verify_user(token):
    """
    Accept an invitation: choose a password and activate the account.

    PATCH /auth/verify/<token>

    Request Body:
        {"password": "SecurePass123"}

    Response (200):
        {
            "success": true,
            "message": "Account verified successfully",
            "data": {
                "access_token": "eyJ...",
                "user": {"email": "...", "first_name": "...", "last_name": "..."}
            }
        }

    Errors:
        - 400: Validation error (weak password)
        - 400: INVALID_TOKEN (unknown or expired token)
    """
    try:
        data = verify_account_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid password', err.messages)

    result = AuthService.verify_user_and_set_password(token, data['password'])

    response, status = ok(
        {'access_token': result['access_token'], 'user': result['user']},
        result['message']
    )
    TokenService.set_session_cookie(response, result['access_token'])
    return response, status


@auth_bp.route('/user/<token>', methods=['GET'])
def get_user_by_token(token):
    """
    Preview the invited user behind a verification token.

    GET /auth/user/<token>

    Response (200):
        {"success": true, "data": {"email", "first_name", "last_name", "company_name"}}

    Errors:
        - 400: INVALID_TOKEN (unknown or expired token)
    """
    return ok(AuthService.get_user_by_verification_token(token), 'Invitation retrieved successfully')
