"""
CompanyDetails Model

Onboarding metadata gathered after sign-up (team size, revenue band,
industry, ...). One record per owner, linked one-to-one to the Company.
"""

from sqlalchemy import Column, String, ForeignKey, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel


class CompanyDetails(BaseModel, db.Model):
    """Extended onboarding metadata for a company."""

    __tablename__ = 'company_details'

    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        unique=True,
        nullable=False
    )

    team_size = Column(String(50), nullable=True)
    estimated_annual_revenue = Column(String(50), nullable=True)
    top_priority = Column(String(255), nullable=True)
    industry = Column(String(100), nullable=True)
    heard_about_us = Column(String(255), nullable=True)

    PATCHABLE_FIELDS = [
        'team_size', 'estimated_annual_revenue', 'top_priority',
        'industry', 'heard_about_us',
    ]

    @classmethod
    def find_by_owner(cls, owner_id):
        return cls.query.filter_by(owner_id=owner_id).first()
