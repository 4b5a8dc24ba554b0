"""
PermissionService - per-user admin flag and access checks.

A user's role is their UserPosition; the Permission record adds the admin
capability. get_permission() resolves both into one view.
"""

import logging
from typing import Dict

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.company import Company
from adrevolution.models.permission import Permission
from adrevolution.models.user import User
from adrevolution.services.company_service import CompanyService
from adrevolution.services.user_position_service import UserPositionService
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class PermissionService:

    @staticmethod
    def create(user_id, is_admin: bool = False) -> Permission:
        """
        Create the permission record of user_id inside the caller's transaction.

        Raises:
            ConflictError: If the user already has one
        """
        user_id = parse_uuid(user_id)
        if Permission.find_by_user(user_id):
            raise ConflictError('Permission already exists for this user')

        permission = Permission(user_id=user_id, is_admin=bool(is_admin))
        db.session.add(permission)
        db.session.flush()
        logger.info(f"Permission created for user {user_id} (admin={permission.is_admin})")
        return permission

    @staticmethod
    def get_record(user_id) -> Permission:
        permission = Permission.find_by_user(parse_uuid(user_id))
        if not permission:
            raise NotFoundError.for_resource('Permission', user_id)
        return permission

    @staticmethod
    def get_permission(user_id) -> Dict:
        """
        Resolve the permission of user_id.

        Returns:
            {'id', 'user_id', 'is_admin', 'is_owner', 'level'} where level is
            the name of the user's position

        Raises:
            NotFoundError: If the user has no permission record or no position
        """
        permission = PermissionService.get_record(user_id)
        position = UserPositionService.get_position_of_user(user_id)
        is_owner = Company.find_by_owner(parse_uuid(user_id)) is not None
        return {
            'id': str(permission.id),
            'user_id': str(permission.user_id),
            'is_admin': permission.is_admin,
            'is_owner': is_owner,
            'level': position.name,
        }

    @staticmethod
    def update(user_id, is_admin: bool) -> Dict:
        """
        Grant or revoke the admin flag of user_id.

        Raises:
            ForbiddenError: When revoking admin from the company owner
        """
        permission = PermissionService.get_record(user_id)
        if not is_admin and Company.find_by_owner(parse_uuid(user_id)):
            raise ForbiddenError('The company owner is always an administrator')

        with transaction('update permission'):
            permission.is_admin = bool(is_admin)

        logger.info(f"Permission of user {user_id} updated: admin={permission.is_admin}")
        return PermissionService.get_permission(user_id)

    @staticmethod
    def is_admin(user_id) -> bool:
        permission = Permission.find_by_user(parse_uuid(user_id))
        return bool(permission and permission.is_admin)

    @staticmethod
    def ensure_can_manage(requester_id, target_user_id) -> None:
        """
        Allow requester_id to act on target_user_id's records.

        Users may manage themselves; administrators may manage users of their
        own company.

        Raises:
            NotFoundError: If target_user_id is not an existing user
            ForbiddenError: Otherwise
        """
        target_uuid = parse_uuid(target_user_id)
        if target_uuid is None or db.session.get(User, target_uuid) is None:
            raise NotFoundError.for_resource('User', target_user_id)
        if str(requester_id) == str(target_user_id):
            return
        if not PermissionService.is_admin(requester_id):
            raise ForbiddenError('Administrator permission required')
        if not CompanyService.share_company(requester_id, target_user_id):
            raise ForbiddenError('User does not belong to your company')
