"""
Business Hours Blueprint.

Each weekday is stored as a JSON object string:
    {"start": "09:00", "end": "17:00", "enabled": true}

Administrators read and change the hours of users in their company under
/business-hours/<user_id>.
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.settings_schema import business_hours_update_schema
from adrevolution.services.business_hours_service import BusinessHoursService
from adrevolution.services.permission_service import PermissionService
from adrevolution.utils.decorators import jwt_required_custom
from adrevolution.utils.responses import ok, validation_error

logger = logging.getLogger(__name__)

business_hours_bp = Blueprint('business_hours', __name__, url_prefix='/business-hours')


@business_hours_bp.route('', methods=['GET'])
@jwt_required_custom
def get_business_hours():
    hours = BusinessHoursService.get(g.user_id)
    return ok(hours.to_dict(), 'Business hours retrieved successfully')


@business_hours_bp.route('', methods=['PATCH'])
@jwt_required_custom
def update_business_hours():
    try:
        data = business_hours_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid business hours', err.messages)

    hours = BusinessHoursService.patch(g.user_id, data)
    return ok(hours.to_dict(), 'Business hours updated successfully')


@business_hours_bp.route('/<user_id>', methods=['GET'])
@jwt_required_custom
def get_user_business_hours(user_id):
    """Business hours of another user of the caller's company (admin, or the user themself)."""
    PermissionService.ensure_can_manage(g.user_id, user_id)
    hours = BusinessHoursService.get(user_id)
    return ok(hours.to_dict(), 'Business hours retrieved successfully')


@business_hours_bp.route('/<user_id>', methods=['PATCH'])
@jwt_required_custom
def update_user_business_hours(user_id):
    try:
        data = business_hours_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid business hours', err.messages)

    PermissionService.ensure_can_manage(g.user_id, user_id)
    hours = BusinessHoursService.patch(user_id, data)
    logger.info(f"User {g.user_id} updated business hours of user {user_id}")
    return ok(hours.to_dict(), 'Business hours updated successfully')
