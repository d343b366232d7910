# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every client-facing error is a JSON envelope:
#   {"success": false, "message": "...", "code": "..."}
# Stack traces and internal details never reach the client.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_envelope(message: str, code: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build the standard error body."""
    body: dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    body.update(extra)
    return body


class ChurchApiException(Exception):
    """
    Base exception for the Church API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "CHURCH_API_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        extra = {"details": self.details} if self.details else {}
        return error_envelope(self.message, self.code, **extra)


class ConfigurationError(ChurchApiException):
    """Raised at startup when required configuration is missing or invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            status_code=500,
            details=details,
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class NotFoundError(ChurchApiException):
    """Raised when a record doesn't exist."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            status_code=404,
            details={"resource": resource, "id": str(identifier)},
        )


class ConflictError(ChurchApiException):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            details=details,
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(ChurchApiException):
    """Raised when credentials or tokens are missing or invalid."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message=message, code="UNAUTHORIZED", status_code=401)


class PermissionDeniedError(ChurchApiException):
    """Raised when an authenticated user lacks the required role."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message=message, code="FORBIDDEN", status_code=403)


# =============================================================================
# Exception Handlers
# =============================================================================

async def church_api_exception_handler(
    request: Request,
    exc: ChurchApiException
) -> JSONResponse:
    """Convert ChurchApiException to JSON response."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Wrap framework HTTP errors in the standard envelope.

    A 404 raised by the router itself (no route matched) becomes
    "Route not found".
    """
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]) or None,
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=error_envelope("Validation error", "VALIDATION_ERROR", errors=errors),
    )
