"""
Airport Service - airports with their city and country.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from accommodation_api.models import Airport, City
from accommodation_api.schemas import AirportDto
from accommodation_api.services.base_service import BaseCRUDService


class AirportService(BaseCRUDService[Airport, AirportDto]):
    """Service for airport management."""

    def __init__(self, db: AsyncSession):
        super().__init__(
            db=db,
            model=Airport,
            entity_name="Airport",
            includes=[(Airport.city, City.country)],
        )

    def to_output(self, entity: Airport) -> AirportDto:
        return AirportDto.from_entity(entity)

    def _build_entity(self, dto: AirportDto) -> Airport:
        return Airport(
            id=dto.id,
            name=dto.name,
            code=dto.code,
            description=dto.description or "",
            city_id=dto.city_id,
        )

    def _apply_changes(self, entity: Airport, dto: AirportDto) -> None:
        entity.name = dto.name
        entity.code = dto.code
        entity.description = dto.description or ""
        entity.city_id = dto.city_id
