"""
UserPositionService - company-scoped positions (roles) and their assignment.
"""

import logging
from typing import Dict, List

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.permission import Permission
from adrevolution.models.user import User
from adrevolution.models.user_position import UserPosition
from adrevolution.services.company_service import CompanyService
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class UserPositionService:

    @staticmethod
    def get_or_create(company_id, name: str) -> UserPosition:
        """
        Return the position name of company_id, creating it on first use.

        Runs inside the caller's transaction.

        Raises:
            BadRequestError: If name is not a known position
        """
        if name not in UserPosition.VALID_NAMES:
            raise BadRequestError(
                f"Invalid position: {name}",
                {'valid_positions': UserPosition.VALID_NAMES}
            )

        company_id = parse_uuid(company_id)
        position = UserPosition.query.filter_by(company_id=company_id, name=name).first()
        if position:
            return position

        position = UserPosition(company_id=company_id, name=name)
        db.session.add(position)
        db.session.flush()
        logger.info(f"Position {name} created for company {company_id}")
        return position

    @staticmethod
    def assign_user_to_position(user: User, position: UserPosition) -> User:
        user.position_id = position.id
        db.session.flush()
        logger.info(f"User {user.id} assigned to position {position.name}")
        return user

    @staticmethod
    def get_position_of_user(user_id) -> UserPosition:
        user_uuid = parse_uuid(user_id)
        user = db.session.get(User, user_uuid) if user_uuid else None
        if not user:
            raise NotFoundError.for_resource('User', user_id)
        if not user.position_id:
            raise NotFoundError('User position not found')
        return db.session.get(UserPosition, user.position_id)

    @staticmethod
    def get_user_position(user_id) -> Dict:
        """
        Position of user_id with its admin flag.

        Returns:
            {'id', 'name', 'is_admin'}

        Raises:
            NotFoundError: If the user or their position does not exist
        """
        position = UserPositionService.get_position_of_user(user_id)
        permission = Permission.find_by_user(parse_uuid(user_id))
        return {
            'id': str(position.id),
            'name': position.name,
            'is_admin': bool(permission and permission.is_admin),
        }

    @staticmethod
    def list_company_positions(user_id) -> List[Dict]:
        """
        Positions in use in the company user_id works in.

        Returns:
            [{'id', 'name', 'user_count'}] ordered by name

        Raises:
            NotFoundError: If the user has no company
        """
        company = CompanyService.get_company(user_id)
        positions = (
            UserPosition.query
            .filter_by(company_id=company.id)
            .order_by(UserPosition.name)
            .all()
        )
        return [
            {
                'id': str(position.id),
                'name': position.name,
                'user_count': User.query.filter_by(position_id=position.id).count(),
            }
            for position in positions
        ]

    @staticmethod
    def change_position(user_id, name: str) -> Dict:
        """
        Move user_id to another position of their company.

        Raises:
            ForbiddenError: When trying to grant or take away COMPANY_OWNER
            NotFoundError: If the user has no company
        """
        user_uuid = parse_uuid(user_id)
        company = CompanyService.get_company(user_uuid)
        if name == UserPosition.COMPANY_OWNER or company.is_owner(user_uuid):
            raise ForbiddenError('The company owner position cannot be reassigned')

        user = db.session.get(User, user_uuid)
        with transaction('change user position'):
            position = UserPositionService.get_or_create(company.id, name)
            UserPositionService.assign_user_to_position(user, position)

        return UserPositionService.get_user_position(user_uuid)
