"""
Configuration module: Settings, logging, constants.
"""

from hospeda_shared.config.settings import settings, DATABASE_URL
from hospeda_shared.config.logging import get_logger, setup_logging
from hospeda_shared.config.constants import (
    Headers,
    Limits,
    SENSITIVE_LOG_KEYS,
    INTERNAL_ERROR_MESSAGE,
)

__all__ = [
    # settings
    "settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Headers",
    "Limits",
    "SENSITIVE_LOG_KEYS",
    "INTERNAL_ERROR_MESSAGE",
]
