"""
Users Blueprint - User Profile and Team Management Routes

This module provides REST API endpoints for user operations:
- GET /users - Get current user profile (with company id)
- PATCH /users - Update current user profile
- GET /users/<user_id> - Get a user of the same company
- POST /users/invite - Invite a user into the company (admin)
- POST /users/<user_id>/resend-invitation - Email a fresh verification link
- DELETE /users/<user_id> - Delete a user and their per-user records

All endpoints require JWT authentication.
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.user_schema import (
    user_update_schema,
    user_invite_schema,
    user_response_schema,
)
from adrevolution.services.auth_service import AuthService
from adrevolution.services.company_service import CompanyService
from adrevolution.services.provisioning_service import ProvisioningService
from adrevolution.services.user_service import UserService
from adrevolution.utils.decorators import jwt_required_custom, admin_required
from adrevolution.utils.responses import ok, created, forbidden, validation_error

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__, url_prefix='/users')


@users_bp.route('', methods=['GET'])
@jwt_required_custom
def get_current_user():
    """
    Get current user profile

    **Authentication**: JWT required

    **Response**:
        200 OK:
            {
                "success": true,
                "message": "User profile retrieved successfully",
                "data": {
                    "id": "uuid",
                    "email": "john@example.com",
                    "first_name": "John",
                    "last_name": "Doe",
                    ...
                    "company_id": "uuid"
                }
            }

        404 Not Found: User not found
    """
    logger.info(f"Fetching profile for user_id={g.user_id}")
    return ok(UserService.get_user_details(g.user_id), 'User profile retrieved successfully')


@users_bp.route('', methods=['PATCH'])
@jwt_required_custom
def update_current_user():
    """
    Update current user profile

    Only profile fields (names, address, phone number) can be updated.
    Email and password are immutable here.

    **Request Body**:
        {
            "first_name": "Jane",      // Optional
            "city": "Montreal"         // Optional
        }

    **Response**:
        200 OK: Updated user
        400 Bad Request: Validation error or empty body
    """
    try:
        data = user_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        logger.warning(f"Validation error updating user {g.user_id}: {err.messages}")
        return validation_error('Invalid user data', err.messages)

    user = UserService.patch_user(g.user_id, data)
    return ok(user_response_schema.dump(user), 'User profile updated successfully')


@users_bp.route('/<user_id>', methods=['GET'])
@jwt_required_custom
def get_user(user_id):
    """Get a user by id. Only users of the caller's own company are visible."""
    user = UserService.get_user_by_id(user_id)
    if str(user.id) != str(g.user_id) and not CompanyService.share_company(g.user_id, user.id):
        return forbidden('User does not belong to your company')
    return ok(user_response_schema.dump(user), 'User retrieved successfully')


@users_bp.route('/invite', methods=['POST'])
@jwt_required_custom
@admin_required
def invite_user():
    """
    Invite a user into the caller's company.

    The user is created without a password together with their membership,
    settings, position and permission, and receives an email with a
    verification link.

    **Authentication**: JWT required, administrator

    **Request Body**:
        {
            "email": "worker@example.com",
            "first_name": "Jane",
            "position": "WORKER",          // Optional, default WORKER
            "is_admin": false,             // Optional
            "labour_cost": 25.5,           // Optional
            "cost_unit": "PER_HOUR",       // Optional
            "surveys": true                // Optional
        }

    **Response**:
        201 Created:
            {
                "success": true,
                "message": "User invited successfully",
                "data": {"user": {...}, "invitation_sent": true}
            }

        400 Bad Request: Validation error, email-exists
        403 Forbidden: Not an administrator, or another company's id
    """
    try:
        data = user_invite_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid invitation data', err.messages)

    user, sent = ProvisioningService.invite_user(g.user_id, data)

    message = 'User invited successfully'
    if not sent:
        message = 'User invited, but the invitation email could not be sent'
    return created({'user': user_response_schema.dump(user), 'invitation_sent': sent}, message)


@users_bp.route('/<user_id>/resend-invitation', methods=['POST'])
@jwt_required_custom
def resend_invitation(user_id):
    """Replace the verification token of a pending user and email it again."""
    sent = AuthService.resend_invitation(g.user_id, user_id)
    message = 'Invitation sent' if sent else 'The invitation email could not be sent'
    return ok({'invitation_sent': sent}, message)


@users_bp.route('/<user_id>', methods=['DELETE'])
@jwt_required_custom
def delete_user(user_id):
    """
    Delete a user.

    Company owners cannot be deleted. Administrators may delete users of
    their own company; any user may delete themselves.
    """
    UserService.delete_user(user_id, g.user_id)
    return ok(message='User deleted successfully')
