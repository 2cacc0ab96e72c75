"""HTTP middleware for language resolution and request logging."""

from .language import LanguageMiddleware
from .logging import StructuredLoggingMiddleware, setup_structured_logging

__all__ = [
    "LanguageMiddleware",
    "StructuredLoggingMiddleware",
    "setup_structured_logging",
]
