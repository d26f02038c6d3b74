"""
Application services.
"""

from .base_service import BaseService, BaseCRUDService
from .domain import (
    AirportService,
    GiftService,
    RestaurantService,
    MealAdditionTemplateService,
)

__all__ = [
    "BaseService",
    "BaseCRUDService",
    "AirportService",
    "GiftService",
    "RestaurantService",
    "MealAdditionTemplateService",
]
