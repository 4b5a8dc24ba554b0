"""
Account Blueprint - per-user account flags.

- GET /account
- PATCH /account
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.settings_schema import account_update_schema
from adrevolution.services.account_service import AccountService
from adrevolution.utils.decorators import jwt_required_custom
from adrevolution.utils.responses import ok, validation_error

logger = logging.getLogger(__name__)

account_bp = Blueprint('account', __name__, url_prefix='/account')


@account_bp.route('', methods=['GET'])
@jwt_required_custom
def get_account():
    return ok(AccountService.get(g.user_id).to_dict(), 'Account retrieved successfully')


@account_bp.route('', methods=['PATCH'])
@jwt_required_custom
def update_account():
    """
    Update the current user's account.

    **Request Body**:
        {"is_blocking_enabled": true}
    """
    try:
        data = account_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid account data', err.messages)

    account = AccountService.patch(g.user_id, data)
    return ok(account.to_dict(), 'Account updated successfully')
