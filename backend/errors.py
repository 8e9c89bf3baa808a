"""
AutoTrack - Error Types and Handlers
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-19): Catch-all 500 envelope; path ids bounded to SQLite INTEGER range
v1.0.0 (2026-09-28): Initial error taxonomy with JSON envelope handlers

Every failure a handler can produce is an AutoTrackError subclass. The
handlers registered by register_exception_handlers() turn them into
{"error": ..., "code": ..., "details": ...} responses.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class AutoTrackError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code: int = 500
    code: str = "internal_error"
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, details: Any = None,
                 code: Optional[str] = None):
        self.message = message or self.message
        self.details = details
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AutoTrackError):
    status_code = 400
    code = "invalid_input"
    message = "Invalid input"


class InvalidIdentifier(AutoTrackError):
    status_code = 400
    code = "invalid_identifier"
    message = "Invalid identifier"


class ReferenceNotFound(AutoTrackError):
    status_code = 400
    code = "reference_not_found"
    message = "Referenced record does not exist"


class Unauthorized(AutoTrackError):
    status_code = 401
    code = "unauthorized"
    message = "Unauthorized"


class NotFound(AutoTrackError):
    status_code = 404
    code = "not_found"
    message = "Not found"


class Conflict(AutoTrackError):
    status_code = 409
    code = "conflict"
    message = "Record already exists"


class ConfigurationError(AutoTrackError):
    status_code = 500
    code = "config/missing-value"
    message = "Server configuration is incomplete"


class InternalError(AutoTrackError):
    status_code = 500
    code = "internal_error"
    message = "Internal Server Error"


# Largest value an SQLite INTEGER column can hold
SQLITE_INT_MAX = 2**63 - 1


def parse_int_id(value: str, name: str) -> int:
    """Parse a non-negative integer path identifier or raise InvalidIdentifier"""
    if not (value.isascii() and value.isdigit()):
        raise InvalidIdentifier(f"Invalid {name}")
    parsed = int(value)
    if parsed > SQLITE_INT_MAX:
        raise InvalidIdentifier(f"Invalid {name}")
    return parsed


async def autotrack_error_handler(request: Request, exc: AutoTrackError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # pydantic error contexts may carry exception objects
    details = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    return await autotrack_error_handler(request, ValidationError(details=details))


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything that is not an AutoTrackError: log it, answer with the 500 envelope"""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI):
    """Attach the AutoTrack error envelope to the application"""
    app.add_exception_handler(AutoTrackError, autotrack_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
