"""
Meal Addition Template Service.

Templates describe a meal (breakfast, lunch, dinner) for a guest type at a
restaurant. Reads always load the restaurant so the DTO carries it.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from accommodation_api.models import MealAdditionTemplate
from accommodation_api.repositories import ExpressionSpecification
from accommodation_api.schemas import MealAdditionTemplateDto
from accommodation_api.services.base_service import BaseCRUDService
from accommodation_shared.results import DataResult


class MealAdditionTemplateService(
    BaseCRUDService[MealAdditionTemplate, MealAdditionTemplateDto]
):
    """Service for meal addition template management."""

    def __init__(self, db: AsyncSession):
        super().__init__(
            db=db,
            model=MealAdditionTemplate,
            entity_name="MealAdditionTemplate",
            includes=[(MealAdditionTemplate.restaurant,)],
        )

    async def list_by_restaurant(
        self, restaurant_id: str
    ) -> DataResult[list[MealAdditionTemplateDto]]:
        """List the templates of one restaurant. Unknown restaurants yield an empty list."""
        spec = ExpressionSpecification(
            MealAdditionTemplate, lambda m: m.restaurant_id == restaurant_id
        )
        return await self._list(self._with_includes(spec))

    def to_output(self, entity: MealAdditionTemplate) -> MealAdditionTemplateDto:
        return MealAdditionTemplateDto.from_entity(entity)

    def _build_entity(self, dto: MealAdditionTemplateDto) -> MealAdditionTemplate:
        return MealAdditionTemplate(
            id=dto.id,
            guest_type=dto.guest_type,
            meal_type=dto.meal_type,
            notes=dto.notes,
            restaurant_id=dto.restaurant_id,
        )

    def _apply_changes(
        self, entity: MealAdditionTemplate, dto: MealAdditionTemplateDto
    ) -> None:
        entity.guest_type = dto.guest_type
        entity.meal_type = dto.meal_type
        entity.notes = dto.notes
        entity.restaurant_id = dto.restaurant_id
