"""API error types and the handlers that render them as {"error": ..., "details": ...}."""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

LOG = logging.getLogger(__name__)


class ApiError(Exception):
    """Base for errors a route raises on purpose. Carries the HTTP status and client-facing message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class LocationValidationError(ApiError):
    """A required field is missing, empty, or not a usable coordinate."""

    status_code = status.HTTP_400_BAD_REQUEST


class LocationNotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(ApiError):
    """A query failed. Message is generic; details holds at most the exception class name."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_body(message: str, details: Optional[str] = None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = details
    return body


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.details))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Re-render framework errors (405, unknown path) in the same error shape."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields: 400 instead of FastAPI's default 422."""
    fields = sorted(
        {
            err["loc"][-1]
            for err in exc.errors()
            if len(err.get("loc", ())) > 1 and err["loc"][0] == "body" and isinstance(err["loc"][-1], str)
        }
    )
    LOG.info("Rejected %s %s: invalid body (%s)", request.method, request.url.path, ", ".join(fields) or "body")
    message = f"Invalid field(s): {', '.join(fields)}." if fields else "Invalid request body."
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_error_body(message))


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on the app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
