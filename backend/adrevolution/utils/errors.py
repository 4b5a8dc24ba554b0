"""
Typed application errors.

Services raise these instead of returning error strings, so the HTTP layer can
tell a missing record from a conflict or a genuine server fault. A single
error handler registered in the application factory turns them into the
standard JSON error body (see utils/responses.py).
"""

from http import HTTPStatus
from typing import Any, Dict, Optional, Union


class AppError(Exception):
    """Base class for all expected application errors."""

    error_code: str = 'APP_ERROR'
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = 'Application error'

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Union[str, Dict[str, Any]]] = None
    ):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {'code': self.error_code, 'message': self.message}
        if self.details is not None:
            body['details'] = self.details
        return body


class BadRequestError(AppError):
    """Malformed request or empty patch payload."""

    error_code = 'BAD_REQUEST'
    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'Bad request'


class EmailExistsError(BadRequestError):
    """Sign-up or invitation with an email that is already registered."""

    error_code = 'email-exists'
    default_message = 'A user with this email already exists'


class InvalidTokenError(BadRequestError):
    """Unknown or expired verification token."""

    error_code = 'INVALID_TOKEN'
    default_message = 'Invalid or expired token'


class UnauthorizedError(AppError):
    error_code = 'UNAUTHORIZED'
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = 'Authentication required'


class ForbiddenError(AppError):
    error_code = 'FORBIDDEN'
    status_code = HTTPStatus.FORBIDDEN
    default_message = 'Access denied'


class NotFoundError(AppError):
    error_code = 'NOT_FOUND'
    status_code = HTTPStatus.NOT_FOUND
    default_message = 'Resource not found'

    @classmethod
    def for_resource(cls, resource: str, key: Any = None) -> 'NotFoundError':
        """Build a NotFoundError named after the missing resource."""
        details = {'key': str(key)} if key is not None else None
        return cls(f"{resource} not found", details)


class ConflictError(AppError):
    """Duplicate of an entity that must be unique (one per owner, unique email)."""

    error_code = 'CONFLICT'
    status_code = HTTPStatus.CONFLICT
    default_message = 'Resource already exists'


class InternalServerError(AppError):
    error_code = 'INTERNAL_ERROR'
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'
