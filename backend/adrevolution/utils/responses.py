"""
JSON envelopes returned by every endpoint.

Success:
    {"success": true, "message": "...", "data": ...}

Error:
    {"success": false, "error": {"code": "...", "message": "...", "details": ...}}

Routes build success bodies with ok()/created(); typed service errors are
rendered by the application-wide AppError handler through app_error_response().
"""

from typing import Any, Dict, Optional, Union
from flask import jsonify, Response
from http import HTTPStatus

from adrevolution.utils.errors import AppError

Details = Optional[Union[str, Dict[str, Any]]]


def success_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = HTTPStatus.OK
) -> tuple[Response, int]:
    """
    Build a success envelope.

    The "data" key is omitted when data is None (e.g. after a delete).

    Example:
        >>> return success_response({"industry": "Transportation"}, "Industry retrieved")
    """
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status_code


def error_response(
    code: str,
    message: str,
    details: Details = None,
    status_code: int = HTTPStatus.BAD_REQUEST
) -> tuple[Response, int]:
    """
    Build an error envelope.

    Args:
        code: Machine-readable code ("UNAUTHORIZED", "email-exists", ...)
        message: Human-readable message
        details: Field-level messages or extra context, omitted when None
        status_code: HTTP status (default 400)
    """
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return jsonify({"success": False, "error": error}), status_code


def app_error_response(error: AppError) -> tuple[Response, int]:
    return jsonify({"success": False, "error": error.to_dict()}), error.status_code


def ok(data: Any = None, message: str = "Success") -> tuple[Response, int]:
    return success_response(data, message, HTTPStatus.OK)


def created(data: Any = None, message: str = "Resource created") -> tuple[Response, int]:
    return success_response(data, message, HTTPStatus.CREATED)


def unauthorized(message: str = "Authentication required", details: Details = None) -> tuple[Response, int]:
    return error_response("UNAUTHORIZED", message, details, HTTPStatus.UNAUTHORIZED)


def forbidden(message: str = "Access denied", details: Details = None) -> tuple[Response, int]:
    return error_response("FORBIDDEN", message, details, HTTPStatus.FORBIDDEN)


def validation_error(message: str = "Validation failed", details: Details = None) -> tuple[Response, int]:
    """
    400 for a request body rejected by a marshmallow schema.

    Example:
        >>> validation_error("Invalid sign-up data provided", err.messages)
        # details: {"email": ["Not a valid email address."]}
    """
    return error_response("VALIDATION_ERROR", message, details, HTTPStatus.BAD_REQUEST)
