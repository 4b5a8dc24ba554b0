"""
LabourCostService - compensation of a user (also served as "payment type").
"""

import logging
from decimal import Decimal
from typing import Dict, Optional

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.labour_cost import LabourCost
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class LabourCostService:

    @staticmethod
    def create(user_id, labour_cost=None, cost_unit: Optional[str] = None) -> LabourCost:
        """
        Create the labour cost record of user_id.

        Defaults to 0.00 PER_HOUR; labour_cost and cost_unit override the
        defaults when given.

        Raises:
            ConflictError: If a record already exists for user_id
            BadRequestError: If cost_unit is not a known unit
        """
        user_id = parse_uuid(user_id)
        if LabourCost.find_by_user(user_id):
            raise ConflictError('Labour cost already exists for this user')
        if cost_unit is not None and cost_unit not in LabourCost.VALID_UNITS:
            raise BadRequestError(f"Invalid cost unit: {cost_unit}")

        record = LabourCost(
            user_id=user_id,
            labour_cost=Decimal(str(labour_cost)) if labour_cost is not None else Decimal('0'),
            cost_unit=cost_unit or LabourCost.PER_HOUR
        )
        db.session.add(record)
        db.session.flush()
        logger.info(f"Labour cost created for user {user_id}: {record.labour_cost} {record.cost_unit}")
        return record

    @staticmethod
    def get(user_id) -> LabourCost:
        record = LabourCost.find_by_user(parse_uuid(user_id))
        if not record:
            raise NotFoundError.for_resource('Labour cost', user_id)
        return record

    @staticmethod
    def patch(user_id, data: Dict) -> LabourCost:
        changes = {k: v for k, v in (data or {}).items() if v is not None}
        if not changes:
            raise BadRequestError('No data provided for update')
        if 'cost_unit' in changes and changes['cost_unit'] not in LabourCost.VALID_UNITS:
            raise BadRequestError(f"Invalid cost unit: {changes['cost_unit']}")
        if 'labour_cost' in changes:
            changes['labour_cost'] = Decimal(str(changes['labour_cost']))

        record = LabourCostService.get(user_id)
        with transaction('update labour cost'):
            updated_fields = record.update_from_dict(changes, LabourCost.PATCHABLE_FIELDS)

        logger.info(f"Labour cost {record.id} updated: {', '.join(updated_fields)}")
        return record

    @staticmethod
    def delete(user_id) -> None:
        """
        Remove the labour cost record of user_id.

        Raises:
            NotFoundError: If the user has no labour cost record
        """
        record = LabourCostService.get(user_id)
        with transaction('delete labour cost'):
            db.session.delete(record)
        logger.info(f"Labour cost of user {user_id} deleted")
