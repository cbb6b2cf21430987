"""Application error hierarchy.

Every error raised on purpose by use cases and guards is an ``HttpError``
carrying the HTTP status, a client-facing message and an optional
machine-readable ``code_error``. The exception normalizer turns these into
JSON:API error documents; anything else is treated as an internal error.
"""

from __future__ import annotations


class HttpError(Exception):
    """Base class for errors that map onto a specific HTTP status."""

    status_code: int = 500

    def __init__(self, message: str | None, code_error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code_error = code_error


class BadRequestError(HttpError):
    status_code = 400


class UnauthorizedError(HttpError):
    status_code = 401


class ForbiddenError(HttpError):
    status_code = 403


class NotFoundError(HttpError):
    status_code = 404


class ConflictError(HttpError):
    status_code = 409


class InternalServerError(HttpError):
    status_code = 500
