"""Domain error taxonomy and the exception handlers that render it.

Every error leaves the API in the same envelope shape:
``{"success": false, "statusCode": ..., "error": ..., "message": ..., "data"?: null}``.
Domain code raises these; only the handlers registered by the app factory
turn them into responses.
"""

from __future__ import annotations

import logging
from typing import Any, List, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

_MISSING = object()

# Reason phrases used in the "error" field
_REASONS = {
    400: "Bad Request",
    401: "Unauthorized",
    404: "Not Found",
    405: "Method Not Allowed",
    500: "Internal Server Error",
}


class AppError(Exception):
    """Base for errors that render as an envelope."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Union[str, List[str], None] = None, data: Any = _MISSING):
        self.message = message if message is not None else self.default_message
        self.data = data
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {
            "success": False,
            "statusCode": self.status_code,
            "error": _REASONS.get(self.status_code, "Error"),
            "message": self.message,
        }
        if self.data is not _MISSING:
            body["data"] = self.data
        return body


class ValidationError(AppError):
    """Payload failed validation; carries every violation message."""

    status_code = 400
    default_message = "Bad Request"

    def __init__(self, messages: List[str]):
        super().__init__(list(messages))

    @property
    def messages(self) -> List[str]:
        return self.message


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"

    def __init__(self, message: str = None):
        super().__init__(message, data=None)


class ConflictError(AppError):
    # Duplicate resources answer 500, not 409; existing clients depend on it.
    status_code = 500
    default_message = "Conflict"

    def __init__(self, message: str = None):
        super().__init__(message, data=None)


class ServerError(AppError):
    status_code = 500

    def __init__(self, message: str = None):
        super().__init__(message, data=None)


# ----------------------------------------------------------------------
# handlers
# ----------------------------------------------------------------------
def _render(exc: AppError, headers: dict = None) -> JSONResponse:
    return JSONResponse(exc.to_body(), status_code=exc.status_code, headers=headers)


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, UnauthorizedError):
        return _render(exc, headers={"WWW-Authenticate": "Bearer"})
    return _render(exc)


def request_error_messages(errors) -> List[str]:
    """Translate FastAPI request errors (path params, JSON decoding) into messages."""
    messages: List[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("path", "query", "body")]
        field = loc[-1] if loc else "body"
        if err.get("type") == "json_invalid":
            msg = "body must be valid JSON"
        elif err.get("type", "").startswith("int") or err.get("type", "").startswith("float"):
            msg = f"{field} must be a number conforming to the specified constraints"
        else:
            msg = f"{field} {err.get('msg', 'is invalid')}"
        if msg not in messages:
            messages.append(msg)
    return messages


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _render(ValidationError(request_error_messages(exc.errors())))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    err = AppError(str(exc.detail), data=None)
    err.status_code = exc.status_code
    return _render(err, headers=getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _render(ServerError())


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "AppError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    "install_error_handlers",
    "request_error_messages",
]
