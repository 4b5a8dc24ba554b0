"""
UserPosition Model

A named role inside one company. Users reference their position through
User.position_id; each (company, name) pair exists at most once and is shared
by every user holding that role.
"""

import logging
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, CheckConstraint, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel

logger = logging.getLogger(__name__)


class UserPosition(BaseModel, db.Model):
    """
    Company-scoped position (role).

    Positions:
        - COMPANY_OWNER: the user who created the company
        - ADMIN, MANAGER, DISPATCHER: office roles
        - WORKER, LIMITED_WORKER: field roles
        - CUSTOM: company-defined role
    """

    __tablename__ = 'user_positions'

    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('companies.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    name = Column(String(32), nullable=False)

    # Valid positions (class constants)
    COMPANY_OWNER = 'COMPANY_OWNER'
    ADMIN = 'ADMIN'
    MANAGER = 'MANAGER'
    DISPATCHER = 'DISPATCHER'
    WORKER = 'WORKER'
    LIMITED_WORKER = 'LIMITED_WORKER'
    CUSTOM = 'CUSTOM'
    VALID_NAMES = [COMPANY_OWNER, ADMIN, MANAGER, DISPATCHER, WORKER, LIMITED_WORKER, CUSTOM]

    __table_args__ = (
        UniqueConstraint('company_id', 'name', name='uq_user_positions_company_name'),
        CheckConstraint(
            "name IN ('COMPANY_OWNER', 'ADMIN', 'MANAGER', 'DISPATCHER', "
            "'WORKER', 'LIMITED_WORKER', 'CUSTOM')",
            name='valid_position_check'
        ),
    )

    def __init__(self, **kwargs):
        name = kwargs.get('name')
        if name is not None and name not in self.VALID_NAMES:
            raise ValueError(
                f"Invalid position: {name}. Must be one of: {', '.join(self.VALID_NAMES)}"
            )
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<UserPosition {self.name} company={self.company_id}>"
