"""
Resource Model - company-owned assets such as vehicles.
"""

from sqlalchemy import Column, String, JSON, ForeignKey, CheckConstraint, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel


class Resource(BaseModel, db.Model):
    """
    Company asset with a type and free-form properties.

    Attributes:
        company_id: Owning company
        user_id: Optional user the resource is assigned to
        name: Display name
        type: Resource type (TRUCK, CAR, VAN, TRAILER, EQUIPMENT, OTHER)
        additional_properties: Free-form JSON (registration number, fuel type, ...)
    """

    __tablename__ = 'resources'

    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('companies.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='SET NULL'),
        nullable=True
    )

    name = Column(String(255), nullable=False)
    type = Column(String(32), default='OTHER', nullable=False)
    additional_properties = Column(JSON, nullable=True)

    TRUCK = 'TRUCK'
    CAR = 'CAR'
    VAN = 'VAN'
    TRAILER = 'TRAILER'
    EQUIPMENT = 'EQUIPMENT'
    OTHER = 'OTHER'
    VALID_TYPES = [TRUCK, CAR, VAN, TRAILER, EQUIPMENT, OTHER]

    __table_args__ = (
        CheckConstraint(
            "type IN ('TRUCK', 'CAR', 'VAN', 'TRAILER', 'EQUIPMENT', 'OTHER')",
            name='valid_resource_type_check'
        ),
    )

    PATCHABLE_FIELDS = ['name', 'type', 'user_id', 'additional_properties']

    def __repr__(self) -> str:
        return f"<Resource {self.name} ({self.type})>"
