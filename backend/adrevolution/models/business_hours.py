"""
BusinessHours Model

Seven free-form day schedules per user. The stored strings are opaque to the
backend; the frontend writes JSON such as
'{"start": "09:00", "end": "17:00", "enabled": true}'.
"""

from sqlalchemy import Column, String, ForeignKey, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel

WORKDAY = '{"start": "09:00", "end": "17:00", "enabled": true}'
WEEKEND = '{"start": "09:00", "end": "17:00", "enabled": false}'


class BusinessHours(BaseModel, db.Model):
    """Weekly business hours of one user."""

    __tablename__ = 'business_hours'

    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        unique=True,
        nullable=False
    )

    monday = Column(String(255), default=WORKDAY, nullable=False)
    tuesday = Column(String(255), default=WORKDAY, nullable=False)
    wednesday = Column(String(255), default=WORKDAY, nullable=False)
    thursday = Column(String(255), default=WORKDAY, nullable=False)
    friday = Column(String(255), default=WORKDAY, nullable=False)
    saturday = Column(String(255), default=WEEKEND, nullable=False)
    sunday = Column(String(255), default=WEEKEND, nullable=False)

    DAYS = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']

    @classmethod
    def find_by_owner(cls, owner_id):
        return cls.query.filter_by(owner_id=owner_id).first()
