"""Error-path JSON:API envelope.

Any exception escaping a route is first classified as either a known HTTP
error (status, message, optional ``code_error``) or an unclassified error,
then rendered as a single-error JSON:API document and logged: warning for
client errors, error with the traceback for server errors.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todoapi.domain.ports import Logger
from todoapi.exceptions import HttpError
from todoapi.jsonapi.formatter import (
    create_error,
    format_error_response,
    serialize,
    utc_timestamp,
)

ERROR_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


def error_title(status: int) -> str:
    return ERROR_TITLES.get(status, "Error")


@dataclass(frozen=True)
class ClassifiedHttpError:
    status: int
    message: str | None
    code_error: str | None = None


@dataclass(frozen=True)
class UnclassifiedError:
    message: str | None
    status: int = 500
    code_error: str | None = None


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def _classify(exc: Exception) -> ClassifiedHttpError | UnclassifiedError:
    if isinstance(exc, HttpError):
        return ClassifiedHttpError(exc.status_code, exc.message, exc.code_error)
    if isinstance(exc, StarletteHTTPException):
        detail = exc.detail
        if isinstance(detail, dict):
            return ClassifiedHttpError(
                exc.status_code, detail.get("message"), detail.get("code_error")
            )
        return ClassifiedHttpError(exc.status_code, None if detail is None else str(detail))
    if isinstance(exc, RequestValidationError):
        return ClassifiedHttpError(400, _validation_message(exc))
    return UnclassifiedError(str(exc) or None)


def classify_exception(exc: Exception) -> ClassifiedHttpError | UnclassifiedError:
    """Map an exception onto a status and message.

    Never raises: if inspecting the exception fails, the result is an
    unclassified 500.
    """
    try:
        return _classify(exc)
    except Exception:
        return UnclassifiedError(None)


class ExceptionNormalizer:
    """Exception handler producing JSON:API error documents.

    Registered on the application for every exception type, so handlers and
    guards can simply raise.
    """

    context = "ExceptionNormalizer"

    def __init__(self, logger: Logger) -> None:
        self.logger = logger

    def build(self, exc: Exception, request: Request) -> tuple[int, dict[str, Any]]:
        classified = classify_exception(exc)
        status = classified.status
        timestamp = utc_timestamp()
        path = request.url.path
        error = create_error(
            status=status,
            title=error_title(status),
            detail=classified.message,
            source={"pointer": path},
            code=classified.code_error,
            meta={"timestamp": timestamp, "path": path},
        )
        document = format_error_response(
            [error],
            meta={"timestamp": timestamp},
            links={"self": str(request.url)},
        )
        self._log(exc, request, classified)
        return status, serialize(document)

    def _log(
        self,
        exc: Exception,
        request: Request,
        classified: ClassifiedHttpError | UnclassifiedError,
    ) -> None:
        summary = (
            f"method={request.method} status={classified.status} "
            f"code_error={classified.code_error} message={classified.message}"
        )
        context = f"End Request for {request.url.path}"
        if classified.status >= 500:
            trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            self.logger.error(context, summary, trace)
        else:
            self.logger.warn(context, summary)

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        status, body = self.build(exc, request)
        headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
        return JSONResponse(status_code=status, content=body, headers=headers)


def register_exception_handlers(app: FastAPI, logger: Logger) -> ExceptionNormalizer:
    """Install one ``ExceptionNormalizer`` for every exception the app can raise."""
    normalizer = ExceptionNormalizer(logger)
    for exc_class in (HttpError, StarletteHTTPException, RequestValidationError, Exception):
        app.add_exception_handler(exc_class, normalizer)
    return normalizer
