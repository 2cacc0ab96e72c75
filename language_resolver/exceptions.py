"""
Custom Exception Classes for language resolution

This module defines the exceptions raised while resolving the content
language of a request, together with machine-readable error codes that the
exception handlers put into the JSON error envelope.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error responses"""

    LANGUAGE_INVALID_LOCALE = "LANGUAGE_INVALID_LOCALE"
    LANGUAGE_RESOLUTION_FAILED = "LANGUAGE_RESOLUTION_FAILED"
    SITE_NOT_FOUND = "SITE_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LanguageResolutionError(Exception):
    """Base exception class for all language resolution errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.LANGUAGE_RESOLUTION_FAILED,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Client Input Exceptions
# ============================================================================


class InvalidLanguageError(LanguageResolutionError):
    """Raised when an explicitly requested locale is not configured"""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(
            message=f'Requested locale "{locale}" could not be found',
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.LANGUAGE_INVALID_LOCALE,
            details={"locale": locale},
        )


# ============================================================================
# Site Routing Exceptions
# ============================================================================


class SiteNotFoundError(LanguageResolutionError):
    """Raised when no configured site matches the request"""

    def __init__(self, host: str, path: str = "/"):
        super().__init__(
            message=f"No site configured for '{host}{path}'",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=ErrorCode.SITE_NOT_FOUND,
            details={"host": host, "path": path},
        )
