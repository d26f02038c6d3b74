"""
Data transfer objects exposed across the service boundary.

DTOs are plain pydantic models created per request. ``from_entity`` only
reads relationships that were eager-loaded, so mapping never issues I/O.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from accommodation_api.models import (
    Airport,
    City,
    Country,
    Gift,
    MealAdditionTemplate,
    Restaurant,
    loaded_attribute,
    new_id,
)
from accommodation_shared.config.constants import GuestType, Limits, MealType


class _Dto(BaseModel):
    model_config = ConfigDict(validate_assignment=True)


# =============================================================================
# Locations
# =============================================================================


class CountryDto(_Dto):
    """Country reference."""

    country_id: str
    name: str
    code: Optional[str] = None

    @classmethod
    def from_entity(cls, country: Country) -> CountryDto:
        return cls(country_id=country.id, name=country.name, code=country.code)


class CityDto(_Dto):
    """City reference with its country when loaded."""

    city_id: str
    name: str
    country: Optional[CountryDto] = None

    @classmethod
    def from_entity(cls, city: City) -> CityDto:
        country = loaded_attribute(city, "country")
        return cls(
            city_id=city.id,
            name=city.name,
            country=CountryDto.from_entity(country) if country is not None else None,
        )


class AirportDto(_Dto):
    """Airport with its city (and the city's country) when loaded."""

    id: str = Field(default_factory=new_id, max_length=Limits.ID_LENGTH)
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    code: str = Field(min_length=1, max_length=Limits.MAX_CODE_LENGTH)
    description: Optional[str] = None
    city_id: Optional[str] = None
    city: Optional[CityDto] = None

    @field_validator("city")
    @classmethod
    def city_matches_city_id(cls, v: Optional[CityDto], info) -> Optional[CityDto]:
        """The nested city is read-only context; writes use city_id."""
        if v is not None and v.city_id != info.data.get("city_id"):
            raise ValueError("city.city_id must match city_id")
        return v

    @classmethod
    def from_entity(cls, airport: Airport) -> AirportDto:
        city = loaded_attribute(airport, "city")
        return cls(
            id=airport.id,
            name=airport.name,
            code=airport.code,
            description=airport.description,
            city_id=airport.city_id,
            city=CityDto.from_entity(city) if city is not None else None,
        )


# =============================================================================
# Gifts
# =============================================================================


class GiftDto(_Dto):
    """Gift offered with a booking."""

    id: str = Field(default_factory=new_id, max_length=Limits.ID_LENGTH)
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)

    @classmethod
    def from_entity(cls, gift: Gift) -> GiftDto:
        return cls(id=gift.id, name=gift.name, description=gift.description)


# =============================================================================
# Restaurants
# =============================================================================


class RestaurantDto(_Dto):
    """Restaurant."""

    id: str = Field(default_factory=new_id, max_length=Limits.ID_LENGTH)
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    comments: Optional[str] = None

    @classmethod
    def from_entity(cls, restaurant: Restaurant) -> RestaurantDto:
        return cls(id=restaurant.id, name=restaurant.name, comments=restaurant.comments)


class MealAdditionTemplateDto(_Dto):
    """Meal addition template with its restaurant when loaded."""

    id: str = Field(default_factory=new_id, max_length=Limits.ID_LENGTH)
    guest_type: GuestType = GuestType.ALL
    meal_type: MealType
    notes: Optional[str] = None
    restaurant_id: Optional[str] = None
    restaurant: Optional[RestaurantDto] = None

    @field_validator("restaurant")
    @classmethod
    def restaurant_matches_restaurant_id(
        cls, v: Optional[RestaurantDto], info
    ) -> Optional[RestaurantDto]:
        """The nested restaurant is read-only context; writes use restaurant_id."""
        if v is not None and v.id != info.data.get("restaurant_id"):
            raise ValueError("restaurant.id must match restaurant_id")
        return v

    @classmethod
    def from_entity(cls, template: MealAdditionTemplate) -> MealAdditionTemplateDto:
        restaurant = loaded_attribute(template, "restaurant")
        return cls(
            id=template.id,
            guest_type=template.guest_type,
            meal_type=template.meal_type,
            notes=template.notes,
            restaurant_id=template.restaurant_id,
            restaurant=RestaurantDto.from_entity(restaurant) if restaurant is not None else None,
        )
