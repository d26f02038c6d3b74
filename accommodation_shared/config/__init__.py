"""
Configuration module: Settings, logging, constants.
"""

from accommodation_shared.config.settings import settings, get_settings, Settings, DATABASE_URL
from accommodation_shared.config.logging import get_logger, setup_logging
from accommodation_shared.config.constants import GuestType, MealType, Limits, Messages

__all__ = [
    # settings
    "settings",
    "get_settings",
    "Settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "GuestType",
    "MealType",
    "Limits",
    "Messages",
]
