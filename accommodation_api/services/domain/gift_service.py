"""
Gift Service.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from accommodation_api.models import Gift
from accommodation_api.schemas import GiftDto
from accommodation_api.services.base_service import BaseCRUDService


class GiftService(BaseCRUDService[Gift, GiftDto]):
    """Service for gift management."""

    def __init__(self, db: AsyncSession):
        super().__init__(db=db, model=Gift, entity_name="Gift")

    def to_output(self, entity: Gift) -> GiftDto:
        return GiftDto.from_entity(entity)

    def _build_entity(self, dto: GiftDto) -> Gift:
        return Gift(id=dto.id, name=dto.name, description=dto.description)

    def _apply_changes(self, entity: Gift, dto: GiftDto) -> None:
        entity.name = dto.name
        entity.description = dto.description
