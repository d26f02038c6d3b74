"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, AuditMixin, id and loaded-attribute helpers
- location: Country, City, Airport
- gift: Gift
- restaurant: Restaurant, MealAdditionTemplate
"""

# Base classes
from .base import Base, AuditMixin, new_id, loaded_attribute

# Locations
from .location import Country, City, Airport

# Gifts
from .gift import Gift

# Restaurants and meal additions
from .restaurant import Restaurant, MealAdditionTemplate

__all__ = [
    # Base
    "Base",
    "AuditMixin",
    "new_id",
    "loaded_attribute",
    # Locations
    "Country",
    "City",
    "Airport",
    # Gifts
    "Gift",
    # Restaurants
    "Restaurant",
    "MealAdditionTemplate",
]
