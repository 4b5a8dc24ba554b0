"""
Base model with common fields for all database models.

Provides UUID primary keys, automatic timestamps, and audit trail support.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import Column, DateTime, Uuid
from typing import Dict, Any, Optional


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Return value as an aware UTC datetime.

    SQLite drops tzinfo on DateTime(timezone=True) columns, so values read
    back from it are naive; they were written as UTC.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def parse_uuid(value) -> Optional[uuid.UUID]:
    """
    Coerce a UUID or its string form to uuid.UUID.

    Route parameters and JWT identities arrive as strings; Uuid columns bind
    uuid.UUID values. Returns None for anything that is not a valid UUID.
    """
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None


class BaseModel:
    """
    Abstract base model with common fields for all models.

    Provides:
    - UUID primary key (id)
    - Automatic timestamps (created_at, updated_at)
    - Audit trail (created_by)
    - Serialization helpers (to_dict, update_from_dict)

    Usage:
        class Account(BaseModel, db.Model):
            __tablename__ = 'accounts'
            is_blocking_enabled = Column(Boolean, default=False, nullable=False)
    """

    # Primary key (UUID)
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
        comment="Unique identifier for the record"
    )

    # Timestamp fields
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when record was created (UTC)"
    )

    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when record was last updated (UTC)"
    )

    # Audit trail - who created this record
    # Nullable to allow self-registration and system-generated records
    created_by = Column(
        Uuid(as_uuid=True),
        nullable=True,
        comment="UUID of user who created this record (nullable for self-registration)"
    )

    # Columns never changed through update_from_dict
    PROTECTED_FIELDS = {'id', 'created_at', 'updated_at', 'created_by'}

    def to_dict(self, exclude: Optional[list] = None) -> Dict[str, Any]:
        """
        Convert model instance to dictionary for JSON serialization.

        Args:
            exclude: List of field names to exclude from output

        Returns:
            Dictionary representation of the model

        Example:
            >>> account = Account(owner_id=user.id)
            >>> account.to_dict(exclude=['created_by'])
            {
                'id': '123e4567-e89b-12d3-a456-426614174000',
                'owner_id': '...',
                'is_blocking_enabled': False,
                'created_at': '2024-01-01T00:00:00+00:00',
                'updated_at': '2024-01-01T00:00:00+00:00'
            }
        """
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            field_name = column.name

            if field_name in exclude:
                continue

            value = getattr(self, field_name, None)

            if isinstance(value, datetime):
                result[field_name] = as_utc(value).isoformat()
            elif isinstance(value, uuid.UUID):
                result[field_name] = str(value)
            elif isinstance(value, Decimal):
                result[field_name] = float(value)
            else:
                result[field_name] = value

        return result

    def update_from_dict(self, data: Dict[str, Any], allowed_fields: Optional[list] = None) -> list:
        """
        Update model fields from dictionary.

        Only updates fields that exist in the model and are in allowed_fields list.
        None values are skipped, so a partial patch never blanks a column.

        Args:
            data: Dictionary with field names and values
            allowed_fields: List of field names that are allowed to be updated
                          If None, all fields except primary key and timestamps are allowed

        Returns:
            List of field names that were changed
        """
        if allowed_fields is None:
            allowed_fields = [
                col.name for col in self.__table__.columns
                if col.name not in self.PROTECTED_FIELDS
            ]

        updated_fields = []
        for field_name, value in data.items():
            if value is None:
                continue
            if field_name in allowed_fields and hasattr(self, field_name):
                setattr(self, field_name, value)
                updated_fields.append(field_name)

        return updated_fields

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"
