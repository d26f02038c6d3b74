"""
Domain Services - application layer.

Services orchestrate repository calls and map entities to DTOs.
Every operation returns a Result / DataResult.

Structure:
    Caller (web layer)
        ↓
    Service (orchestration)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from accommodation_api.services.domain import AirportService

    service = AirportService(db)
    result = await service.get_by_id(airport_id)
    if result.succeeded:
        airport = result.data
"""

from .airport_service import AirportService
from .gift_service import GiftService
from .restaurant_service import RestaurantService
from .meal_addition_template_service import MealAdditionTemplateService

__all__ = [
    "AirportService",
    "GiftService",
    "RestaurantService",
    "MealAdditionTemplateService",
]
