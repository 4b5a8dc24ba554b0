"""
VerificationToken Model

Single-use token sent in an invitation email. Whoever presents it before
expires_at may set the password of the referenced user; the token is deleted
once used.
"""

import secrets
from datetime import timedelta
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid

from adrevolution.extensions import db
from adrevolution.models.base import BaseModel, utcnow, as_utc


class VerificationToken(BaseModel, db.Model):
    __tablename__ = 'verification_tokens'

    token = Column(String(128), unique=True, nullable=False, index=True)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    expires_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def generate(cls, user_id, ttl: timedelta) -> 'VerificationToken':
        """Build a new unsaved token for user_id valid for ttl."""
        return cls(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            expires_at=utcnow() + ttl
        )

    def is_expired(self, now=None) -> bool:
        now = now or utcnow()
        return as_utc(self.expires_at) <= now

    @classmethod
    def find_by_token(cls, token: str):
        if not token:
            return None
        return cls.query.filter_by(token=token).first()
