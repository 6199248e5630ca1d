"""
Core module - configuration and response formatting.
"""
from .config import Settings, get_settings, parse_working_hours
from .responses import (
    ApiResponse,
    ErrorDetail,
    ErrorCodes,
    error_response,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "parse_working_hours",
    # Responses
    "ApiResponse",
    "ErrorDetail",
    "ErrorCodes",
    "error_response",
]
