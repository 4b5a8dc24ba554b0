"""
Labour Cost Blueprint - what a user costs per hour or per month.

Users may read their own labour cost; administrators may read and change the
labour cost of users in their company. Also served under /payment-type.
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.settings_schema import labour_cost_update_schema
from adrevolution.services.labour_cost_service import LabourCostService
from adrevolution.services.permission_service import PermissionService
from adrevolution.utils.decorators import jwt_required_custom, admin_required
from adrevolution.utils.responses import ok, validation_error

logger = logging.getLogger(__name__)

labour_cost_bp = Blueprint('labour_cost', __name__)


@labour_cost_bp.route('/labour-cost/<user_id>', methods=['GET'])
@labour_cost_bp.route('/payment-type/<user_id>', methods=['GET'])
@jwt_required_custom
def get_labour_cost(user_id):
    PermissionService.ensure_can_manage(g.user_id, user_id)
    return ok(LabourCostService.get(user_id).to_dict(), 'Labour cost retrieved successfully')


@labour_cost_bp.route('/labour-cost/<user_id>', methods=['PATCH'])
@labour_cost_bp.route('/payment-type/<user_id>', methods=['PATCH'])
@jwt_required_custom
@admin_required
def update_labour_cost(user_id):
    """
    Update the labour cost of a user.

    **Request Body** (all optional):
        {"labour_cost": 32.5, "cost_unit": "PER_HOUR"}
    """
    try:
        data = labour_cost_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid labour cost', err.messages)

    PermissionService.ensure_can_manage(g.user_id, user_id)
    labour_cost = LabourCostService.patch(user_id, data)
    return ok(labour_cost.to_dict(), 'Labour cost updated successfully')


@labour_cost_bp.route('/labour-cost/<user_id>', methods=['DELETE'])
@labour_cost_bp.route('/payment-type/<user_id>', methods=['DELETE'])
@jwt_required_custom
@admin_required
def delete_labour_cost(user_id):
    PermissionService.ensure_can_manage(g.user_id, user_id)
    LabourCostService.delete(user_id)
    logger.info(f"User {g.user_id} deleted the labour cost of user {user_id}")
    return ok(message='Labour cost deleted successfully')
