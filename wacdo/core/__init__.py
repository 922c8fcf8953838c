"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from wacdo.core.config import get_settings, Settings, EnvironmentMode
from wacdo.core.exceptions import (
    AppError,
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "AppError",
    "AuthError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
]
