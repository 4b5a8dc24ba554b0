"""
Communications Blueprint - notification preferences.

/communications serves the current user, /communications/user/<user_id> lets
administrators manage the users of their company.

Also served under /user-notification-settings, the path used by older
frontend builds.
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.settings_schema import communication_update_schema
from adrevolution.services.communication_service import CommunicationService
from adrevolution.services.permission_service import PermissionService
from adrevolution.utils.decorators import jwt_required_custom
from adrevolution.utils.responses import ok, validation_error

logger = logging.getLogger(__name__)

communications_bp = Blueprint('communications', __name__)


@communications_bp.route('/communications', methods=['GET'])
@communications_bp.route('/user-notification-settings', methods=['GET'])
@jwt_required_custom
def get_communications():
    communication = CommunicationService.get(g.user_id)
    return ok(communication.to_dict(), 'Notification settings retrieved successfully')


@communications_bp.route('/communications', methods=['PATCH'])
@communications_bp.route('/user-notification-settings', methods=['PATCH'])
@jwt_required_custom
def update_communications():
    """
    Update notification preferences.

    **Request Body** (all optional):
        {"surveys": false, "error_messages": true}
    """
    try:
        data = communication_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid notification settings', err.messages)

    communication = CommunicationService.patch(g.user_id, data)
    return ok(communication.to_dict(), 'Notification settings updated successfully')


@communications_bp.route('/communications/user/<user_id>', methods=['GET'])
@communications_bp.route('/user-notification-settings/user/<user_id>', methods=['GET'])
@jwt_required_custom
def get_user_communications(user_id):
    PermissionService.ensure_can_manage(g.user_id, user_id)
    communication = CommunicationService.get(user_id)
    return ok(communication.to_dict(), 'Notification settings retrieved successfully')


@communications_bp.route('/communications/user/<user_id>', methods=['PATCH'])
@communications_bp.route('/user-notification-settings/user/<user_id>', methods=['PATCH'])
@jwt_required_custom
def update_user_communications(user_id):
    """Update the notification preferences of a user of the caller's company (admin)."""
    try:
        data = communication_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid notification settings', err.messages)

    PermissionService.ensure_can_manage(g.user_id, user_id)
    communication = CommunicationService.patch(user_id, data)
    logger.info(f"User {g.user_id} updated notification settings of user {user_id}")
    return ok(communication.to_dict(), 'Notification settings updated successfully')
