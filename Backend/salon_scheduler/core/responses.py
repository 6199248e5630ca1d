"""
Standardized API Response Module

Provides consistent response formatting across all API endpoints.

RESPONSE FORMAT:
    Success:
        {
            "data": <response data>,
            "status": "success"
        }

    Error:
        {
            "data": <partial data, optional>,
            "error": {
                "code": "ERROR_CODE",
                "message": "Human-readable message",
                "details": {...}  # Optional extra context
            },
            "status": "error"
        }

Command parse failures are reported through this envelope with HTTP 200;
the data block still carries whatever fields were extracted.
"""

from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Structured error information."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class ApiResponse(BaseModel, Generic[T]):
    """
    Standardized API response wrapper.

    Usage:
        # Success response
        return ApiResponse.success(parsed_out)

        # Error response, partial data kept for display
        return ApiResponse.failure(
            code=ErrorCodes.MISSING_SERVICE_TYPE,
            message="Could not identify service type",
            data=parsed_out,
        )
    """
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None
    status: str = "success"

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(data=data, status="success")

    @classmethod
    def failure(
        cls,
        code: str,
        message: str,
        details: Optional[dict] = None,
        data: Optional[T] = None,
    ) -> "ApiResponse[T]":
        """Create an error response."""
        return cls(
            data=data,
            error=ErrorDetail(code=code, message=message, details=details),
            status="error",
        )


# ============================================================================
# COMMON ERROR CODES
# ============================================================================

class ErrorCodes:
    """Standard error codes for API responses."""

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"

    # Command parse results (200, status=error)
    EMPTY_COMMAND = "EMPTY_COMMAND"
    MISSING_CLIENT_NAME = "MISSING_CLIENT_NAME"
    MISSING_SERVICE_TYPE = "MISSING_SERVICE_TYPE"
    MISSING_DATE_TIME = "MISSING_DATE_TIME"
    MISSING_EXPLICIT_TIME = "MISSING_EXPLICIT_TIME"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def error_response(
    code: str,
    message: str,
    details: Optional[dict] = None,
) -> dict:
    """
    Create a standardized error response dict.

    Used by the app-level exception handlers, where no data block exists.
    """
    response = {
        "error": {
            "code": code,
            "message": message,
        },
        "status": "error",
    }
    if details:
        response["error"]["details"] = details
    return response
