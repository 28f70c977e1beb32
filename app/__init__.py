"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import Settings, load_settings
from app.exceptions import (
    ServiceError,
    ServiceValidationError,
    AIAnalysisError,
)

__all__ = [
    "Settings",
    "load_settings",
    "ServiceError",
    "ServiceValidationError",
    "AIAnalysisError",
]
