"""
LabourCost Model

Per-user compensation record, exposed by the API both as "labour cost" and
as "payment type".
"""

from sqlalchemy import Column, String, Numeric, ForeignKey, CheckConstraint, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel


class LabourCost(BaseModel, db.Model):
    """
    Labour cost of one user.

    Attributes:
        user_id: User the cost applies to (unique)
        labour_cost: Amount, two decimals (default 0)
        cost_unit: PER_HOUR or PER_MONTH (default PER_HOUR)
    """

    __tablename__ = 'labour_costs'

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        unique=True,
        nullable=False
    )

    labour_cost = Column(Numeric(10, 2), default=0, nullable=False)
    cost_unit = Column(String(16), default='PER_HOUR', nullable=False)

    PER_HOUR = 'PER_HOUR'
    PER_MONTH = 'PER_MONTH'
    VALID_UNITS = [PER_HOUR, PER_MONTH]

    # Largest amount Numeric(10, 2) holds
    MAX_LABOUR_COST = 99999999.99

    __table_args__ = (
        CheckConstraint("cost_unit IN ('PER_HOUR', 'PER_MONTH')", name='valid_cost_unit_check'),
    )

    PATCHABLE_FIELDS = ['labour_cost', 'cost_unit']

    @classmethod
    def find_by_user(cls, user_id):
        return cls.query.filter_by(user_id=user_id).first()
