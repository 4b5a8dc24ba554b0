"""
PasswordService - salted password hashing with bcrypt.

Pure functions over their inputs: nothing here touches the database. The salt
is stored next to the hash on the User row so that sign-in can recompute the
hash and compare.
"""

import hmac
import logging
from typing import Optional

import bcrypt
from flask import current_app

logger = logging.getLogger(__name__)


class PasswordService:
    """Salt generation, hashing and verification."""

    @staticmethod
    def get_salt(rounds: Optional[int] = None) -> str:
        """
        Generate a fresh random bcrypt salt.

        Args:
            rounds: Work factor; defaults to BCRYPT_LOG_ROUNDS from app config

        Returns:
            Salt as a string (e.g. '$2b$12$...')
        """
        if rounds is None:
            rounds = current_app.config.get('BCRYPT_LOG_ROUNDS', 12)
        return bcrypt.gensalt(rounds=rounds).decode('utf-8')

    @staticmethod
    def get_hash(password: str, salt: str) -> str:
        """
        Hash password under salt.

        Deterministic: the same (password, salt) pair always yields the same
        hash, and a different salt yields a different hash.

        Args:
            password: Plain text password
            salt: Salt produced by get_salt()

        Returns:
            Bcrypt hash as a string
        """
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt.encode('utf-8'))
        return hashed.decode('utf-8')

    @staticmethod
    def verify(password: str, salt: Optional[str], expected_hash: Optional[str]) -> bool:
        """
        Check password against a stored salt and hash.

        Returns False when the user has no credentials yet or the stored values
        are malformed.
        """
        if not password or not salt or not expected_hash:
            return False
        try:
            candidate = PasswordService.get_hash(password, salt)
        except ValueError as e:
            logger.warning(f"Password verification failed on malformed input: {str(e)}")
            return False
        return hmac.compare_digest(candidate.encode('utf-8'), expected_hash.encode('utf-8'))
