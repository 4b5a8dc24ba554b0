"""
User model for authentication and profile management.
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import validates
from typing import Optional
import logging

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel

logger = logging.getLogger(__name__)


class User(BaseModel, db.Model):
    """
    User model for authentication and profile management.

    A user is created either by self-registration (with credentials) or by an
    administrator invitation (without credentials until the invitation is
    accepted). Either way the user belongs to exactly one company through
    CompanyMembership and occupies one UserPosition in it.

    Attributes:
        email: User's email address (unique, lowercase, used for login)
        password_hash: Bcrypt hash of the password (NULL until verified)
        password_salt: Bcrypt salt used for password_hash (NULL until verified)
        first_name, last_name: Profile names
        street_address, city, province, postal_code, country, phone_number: Contact fields
        last_login: Timestamp of the last successful sign-in
        is_active: Whether the user may sign in
        position_id: Reference to the user's UserPosition
    """

    __tablename__ = 'users'

    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User's email address (unique, used for login)"
    )

    password_hash = Column(
        String(255),
        nullable=True,
        comment="Bcrypt hashed password (NULL for invited users)"
    )

    password_salt = Column(
        String(64),
        nullable=True,
        comment="Bcrypt salt used to compute password_hash"
    )

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    street_address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    province = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)
    phone_number = Column(String(50), nullable=True)

    last_login = Column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of last successful sign-in (UTC)"
    )

    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether user account is active (can sign in)"
    )

    # users -> user_positions -> companies -> users is a cycle
    position_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('user_positions.id', ondelete='SET NULL', use_alter=True,
                   name='fk_users_position_id'),
        nullable=True,
        comment="Position (role) the user occupies in their company"
    )

    __table_args__ = (
        Index('ix_users_email_active', 'email', 'is_active'),
    )

    PROFILE_FIELDS = [
        'first_name', 'last_name', 'street_address', 'city', 'province',
        'postal_code', 'country', 'phone_number',
    ]

    @validates('email')
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    def has_credentials(self) -> bool:
        """True once a password has been set (sign-up or accepted invitation)."""
        return bool(self.password_hash and self.password_salt)

    def get_full_name(self) -> str:
        return ' '.join(part for part in (self.first_name, self.last_name) if part)

    def to_dict(self, exclude: Optional[list] = None) -> dict:
        """
        Convert user to dictionary, excluding credential columns.

        Args:
            exclude: Additional fields to exclude

        Returns:
            Dictionary representation of user
        """
        exclude = list(exclude or []) + ['password_hash', 'password_salt']
        return super().to_dict(exclude=exclude)

    def __repr__(self) -> str:
        return f"<User {self.email}>"

    @classmethod
    def find_by_email(cls, email: str) -> Optional['User']:
        """
        Find user by email address (case-insensitive).

        Args:
            email: Email address to search for

        Returns:
            User instance or None if not found
        """
        if not email:
            return None
        return cls.query.filter_by(email=email.strip().lower()).first()
