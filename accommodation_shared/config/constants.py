"""
Centralized constants for the accommodation backend.

Usage:
    from accommodation_shared.config.constants import GuestType, MealType, Limits

    if template.meal_type == MealType.BREAKFAST:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# Meal Additions
# =============================================================================


class GuestType(str, Enum):
    """Which guests a meal addition applies to."""

    ALL = "ALL"
    ADULTS = "ADULTS"
    CHILDREN = "CHILDREN"


class MealType(str, Enum):
    """Meal of the day a meal addition covers."""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Column and field length limits."""

    ID_LENGTH: Final[int] = 36
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_CODE_LENGTH: Final[int] = 10
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000


# =============================================================================
# Messages
# =============================================================================


class Messages:
    """User-facing message templates shared by repositories and services."""

    NOT_FOUND: Final[str] = "No {entity} with id matching '{entity_id}' was found in the database"
    KEY_NOT_FOUND: Final[str] = "{entity} with ID {entity_id} not found."
    CONCURRENCY_CONFLICT: Final[str] = "The entity was updated by another user or process."
    UPDATED: Final[str] = "{entity} '{entity_id}' was updated successfully"
    REMOVED: Final[str] = "{entity} with id '{entity_id}' was successfully removed"
