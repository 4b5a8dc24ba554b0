"""
Account Model - per-user account settings.
"""

from sqlalchemy import Column, Boolean, ForeignKey, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel


class Account(BaseModel, db.Model):
    """
    Account settings owned by one user.

    Attributes:
        owner_id: User owning the account (unique)
        is_blocking_enabled: Whether blocking is enabled (default False)
    """

    __tablename__ = 'accounts'

    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        unique=True,
        nullable=False
    )

    is_blocking_enabled = Column(Boolean, default=False, nullable=False)

    PATCHABLE_FIELDS = ['is_blocking_enabled']

    @classmethod
    def find_by_owner(cls, owner_id):
        return cls.query.filter_by(owner_id=owner_id).first()
