"""
Permission Model - the per-user capability record.

The role itself lives on the user's UserPosition; this record only carries
the admin flag.
"""

from sqlalchemy import Column, Boolean, ForeignKey, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel


class Permission(BaseModel, db.Model):
    __tablename__ = 'permissions'

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        unique=True,
        nullable=False
    )

    is_admin = Column(Boolean, default=False, nullable=False)

    @classmethod
    def find_by_user(cls, user_id):
        return cls.query.filter_by(user_id=user_id).first()
