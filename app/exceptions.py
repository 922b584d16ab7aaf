# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every domain failure maps to exactly one status code and a structured body.
# Internal causes are logged server side and never sent to the client.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FlowerShopException(Exception):
    """
    Base exception for the Flower Shop API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "FLOWERSHOP_ERROR",
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
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# 400 - Validation
# =============================================================================

class ValidationError(FlowerShopException):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )


# =============================================================================
# 401 - Authentication
# =============================================================================

class AuthError(FlowerShopException):
    """Raised when a request lacks a valid session or credentials."""

    def __init__(self, message: str = "Please log in", code: str = "AUTH_REQUIRED"):
        super().__init__(message=message, code=code, status_code=401)


class InvalidCredentialsError(AuthError):
    """
    Raised on a failed login.

    The message is the same whether the email is unknown or the
    password is wrong.
    """

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
        )


# =============================================================================
# 404 - Not Found
# =============================================================================

class NotFoundError(FlowerShopException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code, status_code=404)


class FlowerNotFoundError(NotFoundError):
    """Raised when a flower ID doesn't exist."""

    def __init__(self, flower_id: Any):
        super().__init__(message="Flower not found", code="FLOWER_NOT_FOUND")
        self.details = {"flower_id": str(flower_id)}


# =============================================================================
# 409 - Conflict
# =============================================================================

class ConflictError(FlowerShopException):
    """Raised when a unique key is already taken."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message=message, code=code, status_code=409)


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self):
        super().__init__(
            message="Email already registered",
            code="EMAIL_ALREADY_REGISTERED",
        )


# =============================================================================
# 500 / 503 - Server Side
# =============================================================================

class InternalError(FlowerShopException):
    """
    Raised when the datastore or serialization layer fails unexpectedly.

    The message is what the client sees, so keep it generic. Log the real
    cause before raising and chain it with `raise ... from e`.
    """

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message=message, code="INTERNAL_ERROR", status_code=500)


class ServiceUnavailableError(FlowerShopException):
    """Raised by the health probe when the datastore is unreachable."""

    def __init__(self):
        super().__init__(
            message="Database unreachable",
            code="SERVICE_UNAVAILABLE",
            status_code=503,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "detail": self.message,
            "code": self.code,
        }


# =============================================================================
# Exception Handlers
# =============================================================================

async def flowershop_exception_handler(
    request: Request,
    exc: FlowerShopException
) -> JSONResponse:
    """
    Convert FlowerShopException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - details: Additional context (if any)
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body/path validation errors.

    Malformed input is a client error, reported as 400 like a missing field.
    A missing or unparseable body as a whole is reported as field "body".
    """
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": {"fields": [f for f in fields if f] or ["body"]},
        }
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
