# ruff: noqa: D107
"""Base exception classes.

Every domain error is an ``HTTPException`` so the boundary can render it
without a per-route translation table: Not-Found is 404, Access-Denied is
403, Invalid-State is 400 and Validation is 422.
"""

from typing import Any

from fastapi import HTTPException


class BaseAppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={"message": message, "error_code": error_code, "details": details},
        )


class NotFoundError(BaseAppException):
    """Raised when a resource does not exist or is hidden from the caller."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
        error_code: str = "NOT_FOUND",
    ):
        super().__init__(message=message, status_code=404, error_code=error_code, details=details)


class AccessDeniedError(BaseAppException):
    """Raised when the caller is identified but lacks the required relationship."""

    def __init__(
        self,
        message: str = "Access denied",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=403,
            error_code="ACCESS_DENIED",
            details=details,
        )


class InvalidStateError(BaseAppException):
    """Raised when a mutation would break a domain rule."""

    def __init__(
        self,
        message: str = "Invalid operation",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_STATE",
            details=details,
        )


class ValidationError(BaseAppException):
    """Exception raised when validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=422,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class PersistenceError(BaseAppException):
    """Raised when a unit of work could not be committed and was rolled back."""

    def __init__(self, message: str = "Failed to persist changes"):
        super().__init__(message=message, status_code=500, error_code="PERSISTENCE_ERROR")
