"""
AccountService - per-user account settings.
"""

import logging
from typing import Dict

from adrevolution.extensions import db
from adrevolution.models.account import Account
from adrevolution.models.base import parse_uuid
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class AccountService:

    @staticmethod
    def create(owner_id) -> Account:
        """
        Create the account of owner_id inside the caller's transaction.

        Raises:
            ConflictError: If the user already has an account
        """
        owner_id = parse_uuid(owner_id)
        if Account.find_by_owner(owner_id):
            raise ConflictError('Account already exists for this user')

        account = Account(owner_id=owner_id, is_blocking_enabled=False)
        db.session.add(account)
        db.session.flush()
        logger.info(f"Account created for user {owner_id}")
        return account

    @staticmethod
    def get(owner_id) -> Account:
        account = Account.find_by_owner(parse_uuid(owner_id))
        if not account:
            raise NotFoundError.for_resource('Account', owner_id)
        return account

    @staticmethod
    def patch(owner_id, data: Dict) -> Account:
        """
        Update account settings.

        Raises:
            BadRequestError: If data carries no field to update
            NotFoundError: If the user has no account
        """
        changes = {k: v for k, v in (data or {}).items() if v is not None}
        if not changes:
            raise BadRequestError('No data provided for update')

        account = AccountService.get(owner_id)
        with transaction('update account'):
            updated_fields = account.update_from_dict(changes, Account.PATCHABLE_FIELDS)

        logger.info(f"Account {account.id} updated: {', '.join(updated_fields)}")
        return account
