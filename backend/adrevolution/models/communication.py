"""
Communication Model - a user's notification preferences.
"""

from sqlalchemy import Column, Boolean, ForeignKey, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel


class Communication(BaseModel, db.Model):
    """
    Notification settings of one user.

    Attributes:
        user_id: Owning user (unique)
        surveys: Receive survey emails (default True)
        error_messages: Receive error notifications (default True)
    """

    __tablename__ = 'communications'

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        unique=True,
        nullable=False
    )

    surveys = Column(Boolean, default=True, nullable=False)
    error_messages = Column(Boolean, default=True, nullable=False)

    PATCHABLE_FIELDS = ['surveys', 'error_messages']

    @classmethod
    def find_by_user(cls, user_id):
        return cls.query.filter_by(user_id=user_id).first()
