"""
Custom decorators for route protection and access control.

Provides JWT validation and administrator checks.
"""

from functools import wraps
from typing import Callable
from flask import g
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity, get_jwt
from flask_jwt_extended.exceptions import JWTExtendedException
import jwt as pyjwt
import logging

from adrevolution.utils.responses import unauthorized, forbidden
from adrevolution.services.permission_service import PermissionService

logger = logging.getLogger(__name__)


def jwt_required_custom(fn: Callable) -> Callable:
    """
    Custom JWT authentication decorator.

    Validates the session token and injects user information into Flask's g
    object. The token is read from the 'access-token' cookie or from an
    'Authorization: Bearer' header.

    Usage:
        @users_bp.route('', methods=['GET'])
        @jwt_required_custom
        def get_user():
            user_id = g.user_id

    Sets in Flask g:
        - g.user_id: UUID string of the authenticated user
        - g.jwt_claims: Full JWT claims dict (sub, id, email, iat, exp, ...)

    Returns:
        Decorated function with JWT validation
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            verify_jwt_in_request()
            user_id = get_jwt_identity()
            jwt_claims = get_jwt()
        except (JWTExtendedException, pyjwt.PyJWTError) as e:
            logger.warning(f"JWT validation failed: {str(e)}")
            return unauthorized("Authentication failed", str(e))

        if not user_id:
            logger.warning("JWT token missing user identity")
            return unauthorized("Invalid authentication token")

        g.user_id = user_id
        g.jwt_claims = jwt_claims

        logger.debug(f"Authenticated user: {user_id}")
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn: Callable) -> Callable:
    """
    Restrict a route to users holding the admin flag.

    Must be used together with (and after) @jwt_required_custom.

    Usage:
        @users_bp.route('/invite', methods=['POST'])
        @jwt_required_custom
        @admin_required
        def invite_user():
            ...
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user_id = getattr(g, 'user_id', None)
        if not user_id:
            logger.error("admin_required used without jwt_required_custom")
            return unauthorized()

        if not PermissionService.is_admin(user_id):
            logger.warning(f"User {user_id} attempted an administrator action")
            return forbidden("Administrator permission required")

        return fn(*args, **kwargs)

    return wrapper
