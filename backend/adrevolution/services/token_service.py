"""
TokenService - session token issuance and verification.

Tokens are Flask-JWT-Extended access tokens carrying the user id and email.
They are delivered in an HTTP-only cookie (JWT_ACCESS_COOKIE_NAME,
'access-token') and are also accepted as a Bearer header. Sign-out only
clears the cookie: there is no server-side revocation, a token stays valid
until it expires.
"""

import logging
from typing import Any, Dict

import jwt as pyjwt
from flask import current_app
from flask_jwt_extended import (
    create_access_token,
    decode_token,
    set_access_cookies,
    unset_jwt_cookies,
)
from flask_jwt_extended.exceptions import JWTExtendedException

from adrevolution.models.user import User
from adrevolution.utils.errors import UnauthorizedError

logger = logging.getLogger(__name__)


class TokenService:
    """Issue, verify and deliver signed session tokens."""

    @staticmethod
    def issue(user: User) -> str:
        """
        Issue a signed access token for user.

        Claims: sub and id (user id), email, iat, exp. Lifetime comes from
        JWT_ACCESS_TOKEN_EXPIRES (one day by default).
        """
        token = create_access_token(
            identity=str(user.id),
            additional_claims={'id': str(user.id), 'email': user.email}
        )
        logger.debug(f"Issued access token for user {user.id}")
        return token

    @staticmethod
    def verify(token: str) -> Dict[str, Any]:
        """
        Validate signature and expiry of token.

        Returns:
            Decoded claims

        Raises:
            UnauthorizedError: If the token is missing, malformed, forged or expired
        """
        if not token:
            raise UnauthorizedError('Missing access token')
        try:
            return decode_token(token)
        except pyjwt.ExpiredSignatureError as e:
            raise UnauthorizedError('The token has expired. Please sign in again.') from e
        except (pyjwt.PyJWTError, JWTExtendedException) as e:
            logger.warning(f"Rejected access token: {str(e)}")
            raise UnauthorizedError('Invalid access token') from e

    @staticmethod
    def set_session_cookie(response, token: str):
        """Attach token to response as the HTTP-only session cookie."""
        max_age = int(current_app.config['JWT_ACCESS_TOKEN_EXPIRES'].total_seconds())
        set_access_cookies(response, token, max_age=max_age)
        return response

    @staticmethod
    def clear_session_cookie(response):
        unset_jwt_cookies(response)
        return response
