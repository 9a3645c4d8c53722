"""
API Dependencies
================
Centralized imports for API dependencies.
"""

from image_storage.api.dependencies.logging import RequestLoggingMiddleware
from image_storage.api.dependencies.storage import get_storage_facade

__all__ = [
    # Storage dependencies
    "get_storage_facade",

    # Middleware
    "RequestLoggingMiddleware",
]
