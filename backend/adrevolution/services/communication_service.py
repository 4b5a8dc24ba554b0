"""
CommunicationService - notification preferences of a user.
"""

import logging
from typing import Dict, Optional

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.communication import Communication
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class CommunicationService:

    @staticmethod
    def create(user_id, surveys: Optional[bool] = None) -> Communication:
        """
        Create notification settings for user_id (all notifications on).

        Args:
            user_id: Owning user
            surveys: Initial survey preference; None keeps the default

        Raises:
            ConflictError: If settings already exist for user_id
        """
        user_id = parse_uuid(user_id)
        if Communication.find_by_user(user_id):
            raise ConflictError('Communication settings already exist for this user')

        communication = Communication(user_id=user_id, surveys=True, error_messages=True)
        if surveys is not None:
            communication.surveys = surveys
        db.session.add(communication)
        db.session.flush()
        logger.info(f"Communication settings created for user {user_id}")
        return communication

    @staticmethod
    def get(user_id) -> Communication:
        communication = Communication.find_by_user(parse_uuid(user_id))
        if not communication:
            raise NotFoundError.for_resource('Communication settings', user_id)
        return communication

    @staticmethod
    def patch(user_id, data: Dict) -> Communication:
        changes = {k: v for k, v in (data or {}).items() if v is not None}
        if not changes:
            raise BadRequestError('No data provided for update')

        communication = CommunicationService.get(user_id)
        with transaction('update communication settings'):
            updated_fields = communication.update_from_dict(changes, Communication.PATCHABLE_FIELDS)

        logger.info(f"Communication settings {communication.id} updated: {', '.join(updated_fields)}")
        return communication
