"""
Restaurant Service.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from accommodation_api.models import Restaurant
from accommodation_api.schemas import RestaurantDto
from accommodation_api.services.base_service import BaseCRUDService


class RestaurantService(BaseCRUDService[Restaurant, RestaurantDto]):
    """Service for restaurant management."""

    def __init__(self, db: AsyncSession):
        super().__init__(db=db, model=Restaurant, entity_name="Restaurant")

    def to_output(self, entity: Restaurant) -> RestaurantDto:
        return RestaurantDto.from_entity(entity)

    def _build_entity(self, dto: RestaurantDto) -> Restaurant:
        return Restaurant(id=dto.id, name=dto.name, comments=dto.comments)

    def _apply_changes(self, entity: Restaurant, dto: RestaurantDto) -> None:
        entity.name = dto.name
        entity.comments = dto.comments
