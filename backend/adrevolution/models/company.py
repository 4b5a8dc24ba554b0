"""
Company Model

A company is the tenant root: it is owned by exactly one user (the user who
signed up) and every other user joins it through CompanyMembership.
"""

import logging
from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from typing import Optional

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel

logger = logging.getLogger(__name__)


class Company(BaseModel, db.Model):
    """
    Company (tenant) with profile, address and locale settings.

    Attributes:
        owner_id: User who owns the company (unique: one company per owner)
        company_details_id: Onboarding metadata (unique, one-to-one)
        company_name, phone_number, website_url, company_email: Profile fields
        street1, city, state, post_code, country: Address fields
        timezone, date_format, time_format, first_day_of_week: Locale settings
        display_business_hours: Whether business hours are shown to customers
    """

    __tablename__ = 'companies'

    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        unique=True,
        nullable=False,
        comment="Owning user (one company per owner)"
    )

    company_details_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('company_details.id', ondelete='SET NULL'),
        unique=True,
        nullable=True
    )

    company_name = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    website_url = Column(String(255), nullable=True)
    company_email = Column(String(255), nullable=True)

    street1 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    post_code = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)

    timezone = Column(String(64), nullable=True)
    date_format = Column(String(32), nullable=True)
    time_format = Column(String(32), nullable=True)
    first_day_of_week = Column(String(16), nullable=True)
    display_business_hours = Column(Boolean, default=False, nullable=False)

    owner = relationship('User', foreign_keys=[owner_id])
    company_details = relationship('CompanyDetails', foreign_keys=[company_details_id])
    memberships = relationship(
        'CompanyMembership',
        back_populates='company',
        cascade='all, delete-orphan'
    )

    PATCHABLE_FIELDS = [
        'company_name', 'phone_number', 'website_url', 'company_email',
        'street1', 'city', 'state', 'post_code', 'country',
        'timezone', 'date_format', 'time_format', 'first_day_of_week',
        'display_business_hours',
    ]

    def is_owner(self, user_id) -> bool:
        return str(self.owner_id) == str(user_id)

    def __repr__(self) -> str:
        return f"<Company {self.company_name or self.id}>"

    @classmethod
    def find_by_owner(cls, owner_id) -> Optional['Company']:
        return cls.query.filter_by(owner_id=owner_id).first()
