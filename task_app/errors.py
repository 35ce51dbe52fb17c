"""
Typed API errors and the single boundary that turns them into responses.

Every failure raised below the HTTP layer is one of the ``ApiError``
subclasses defined here.  Views, decorators and services never build
error responses themselves; ``register_error_handlers`` installs the
translators that map each error kind to a status code and a consistent
``{"error": "..."}`` JSON envelope.

Error kinds:
    ValidationError     -- 422, with per-field message lists in ``details``
    UnauthorizedError   -- 401, generic message
    ForbiddenError      -- 403
    NotFoundError       -- 404
    ConflictError       -- 409
    InternalError       -- 500, message never exposes internals
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid token"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """Base class for errors that carry their own HTTP status code."""

    status_code: int = 500
    default_message: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(ApiError):
    """Malformed or out-of-range input."""

    status_code = 422
    default_message = "Validation error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class UnauthorizedError(ApiError):
    """Missing, malformed, invalid or expired credentials."""

    status_code = 401
    default_message = INVALID_TOKEN_MESSAGE


class InvalidTokenError(UnauthorizedError):
    """
    Raised by the token service when a token cannot be trusted.

    The message is fixed so that a bad signature, an expired token and a
    structurally broken token are indistinguishable to the caller.
    """

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(INVALID_TOKEN_MESSAGE)
        self.reason = reason


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "You're not allowed to access this resource"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Conflict"


class InternalError(ApiError):
    """Failures the caller cannot fix; the message is always generic."""

    status_code = 500

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(INTERNAL_ERROR_MESSAGE)
        self.reason = reason


class CorruptCredentialError(InternalError):
    """A stored password hash could not be parsed."""


def _json_error(error: ApiError) -> tuple[Response, int]:
    return jsonify(error.to_dict()), error.status_code


def register_error_handlers(app: Flask) -> None:
    """
    Install the JSON error translators on *app*.

    ``ApiError`` subclasses are rendered directly.  Werkzeug HTTP errors
    (unknown route, wrong method) keep their status code and are
    rendered in the same envelope under their standard name.  Views read
    bodies with ``get_json(silent=True)``, so an unparseable body is a
    validation failure raised by ``parse``, not a Werkzeug error.
    Anything else is logged with its traceback and reported as a generic
    500.
    """

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        if isinstance(error, InternalError):
            logger.error("Internal error: %s", error.reason or error.__class__.__name__)
        return _json_error(error)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> tuple[Response, int]:
        return jsonify({"error": error.name}), error.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception) -> tuple[Response, int]:
        logger.exception("Unhandled exception: %s", error)
        return _json_error(InternalError())
