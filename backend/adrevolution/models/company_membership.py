"""
CompanyMembership Model

Association between Users and Companies. Every user (owner included) belongs
to exactly one company: user_id is unique, so a second membership for the
same user is rejected by the database.
"""

import logging
from sqlalchemy import DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from adrevolution.extensions import db
from adrevolution.models.base import utcnow

logger = logging.getLogger(__name__)


class CompanyMembership(db.Model):
    """
    Association model linking a User to the Company they work in.

    Attributes:
        user_id (UUID): Foreign key to users.id (part of composite primary key, unique)
        company_id (UUID): Foreign key to companies.id (part of composite primary key)
        joined_at (datetime): UTC timestamp when the user joined the company
    """

    __tablename__ = 'company_memberships'

    user_id = db.Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        primary_key=True,
        unique=True,
        nullable=False
    )
    company_id = db.Column(
        Uuid(as_uuid=True),
        ForeignKey('companies.id', ondelete='CASCADE'),
        primary_key=True,
        nullable=False
    )

    joined_at = db.Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship('User')
    company = relationship('Company', back_populates='memberships')

    __table_args__ = (
        Index('ix_company_memberships_company_id', 'company_id'),
    )

    def __repr__(self) -> str:
        return f"<CompanyMembership user={self.user_id} company={self.company_id}>"

    @classmethod
    def find_by_user(cls, user_id):
        return cls.query.filter_by(user_id=user_id).first()
