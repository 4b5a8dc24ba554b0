"""
BusinessHoursService - weekly business hours of a user.
"""

import logging
from typing import Dict

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.business_hours import BusinessHours
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class BusinessHoursService:

    @staticmethod
    def create(owner_id) -> BusinessHours:
        """
        Create default business hours (weekdays 09:00-17:00, weekend off).

        Raises:
            ConflictError: If business hours already exist for owner_id
        """
        owner_id = parse_uuid(owner_id)
        if BusinessHours.find_by_owner(owner_id):
            raise ConflictError('Business hours already exist for this user')

        hours = BusinessHours(owner_id=owner_id)
        db.session.add(hours)
        db.session.flush()
        logger.info(f"Business hours created for user {owner_id}")
        return hours

    @staticmethod
    def get(owner_id) -> BusinessHours:
        hours = BusinessHours.find_by_owner(parse_uuid(owner_id))
        if not hours:
            raise NotFoundError.for_resource('Business hours', owner_id)
        return hours

    @staticmethod
    def patch(owner_id, data: Dict) -> BusinessHours:
        changes = {k: v for k, v in (data or {}).items() if v is not None}
        if not changes:
            raise BadRequestError('No data provided for update')

        hours = BusinessHoursService.get(owner_id)
        with transaction('update business hours'):
            updated_fields = hours.update_from_dict(changes, BusinessHours.DAYS)

        logger.info(f"Business hours {hours.id} updated: {', '.join(updated_fields)}")
        return hours
