"""
Permissions and Positions Blueprint

- GET /permissions - Permission of the current user
- PATCH /permissions/<user_id> - Grant or revoke admin (admin)
- GET /user-position - Position of the current user
- GET /user-position/list - Positions of the current user's company
- PATCH /user-position/<user_id> - Move a user to another position (admin)

Administrators may only change users of their own company. The company
owner always keeps the COMPANY_OWNER position and the admin flag.
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.settings_schema import permission_update_schema, position_update_schema
from adrevolution.services.permission_service import PermissionService
from adrevolution.services.user_position_service import UserPositionService
from adrevolution.utils.decorators import jwt_required_custom, admin_required
from adrevolution.utils.responses import ok, validation_error

logger = logging.getLogger(__name__)

permissions_bp = Blueprint('permissions', __name__)


@permissions_bp.route('/permissions', methods=['GET'])
@jwt_required_custom
def get_permission():
    """
    **Response**:
        200 OK:
            {
                "success": true,
                "data": {
                    "id": "uuid",
                    "user_id": "uuid",
                    "is_admin": true,
                    "is_owner": true,
                    "level": "COMPANY_OWNER"
                }
            }
    """
    return ok(PermissionService.get_permission(g.user_id), 'Permission retrieved successfully')


@permissions_bp.route('/permissions/<user_id>', methods=['PATCH'])
@jwt_required_custom
@admin_required
def update_permission(user_id):
    try:
        data = permission_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid permission data', err.messages)

    PermissionService.ensure_can_manage(g.user_id, user_id)
    permission = PermissionService.update(user_id, data['is_admin'])
    logger.info(f"User {g.user_id} set admin={data['is_admin']} for user {user_id}")
    return ok(permission, 'Permission updated successfully')


@permissions_bp.route('/user-position', methods=['GET'])
@jwt_required_custom
def get_user_position():
    return ok(UserPositionService.get_user_position(g.user_id), 'Position retrieved successfully')


@permissions_bp.route('/user-position/list', methods=['GET'])
@jwt_required_custom
def list_company_positions():
    """
    **Response**:
        200 OK:
            {
                "success": true,
                "data": [
                    {"id": "uuid", "name": "COMPANY_OWNER", "user_count": 1},
                    {"id": "uuid", "name": "WORKER", "user_count": 3}
                ]
            }
    """
    positions = UserPositionService.list_company_positions(g.user_id)
    return ok(positions, 'Positions retrieved successfully')


@permissions_bp.route('/user-position/<user_id>', methods=['PATCH'])
@jwt_required_custom
@admin_required
def update_user_position(user_id):
    try:
        data = position_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid position', err.messages)

    PermissionService.ensure_can_manage(g.user_id, user_id)
    position = UserPositionService.change_position(user_id, data['name'])
    logger.info(f"User {g.user_id} moved user {user_id} to position {data['name']}")
    return ok(position, 'Position updated successfully')
