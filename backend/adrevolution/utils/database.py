"""
Database utilities: transaction boundaries for the main SQLAlchemy session.

Entity services only add and flush; callers that own a unit of work wrap it
in ``transaction()`` so that everything inside commits together or not at all.
"""

from contextlib import contextmanager
from typing import Generator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from adrevolution.extensions import db
from adrevolution.utils.errors import AppError, ConflictError, InternalServerError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(description: str) -> Generator[Session, None, None]:
    """
    Context manager for one unit of work on ``db.session``.

    Commits on success. On any failure the session is rolled back; unique
    constraint violations surface as ConflictError, other database errors as
    InternalServerError, and application errors are re-raised unchanged.

    Args:
        description: Human-readable name of the unit of work, used in logs

    Yields:
        The SQLAlchemy session

    Example:
        >>> with transaction('patch account'):
        ...     account.is_blocking_enabled = True
    """
    session = db.session
    try:
        yield session
        session.commit()
        logger.debug(f"Committed transaction: {description}")
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Integrity error during {description}: {e.orig}")
        raise ConflictError(f"Conflict while trying to {description}") from e
    except AppError:
        session.rollback()
        logger.info(f"Rolled back transaction: {description}")
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error during {description}: {str(e)}", exc_info=True)
        raise InternalServerError(f"Unable to {description}. Please try again later.") from e
    except Exception:
        session.rollback()
        logger.error(f"Rolled back transaction after unexpected error: {description}", exc_info=True)
        raise
