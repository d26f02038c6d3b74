"""
Accommodation Repository Manager - one repository per aggregate over a shared session.
"""

from functools import cached_property

from sqlalchemy.ext.asyncio import AsyncSession

from accommodation_api.models import (
    Airport,
    City,
    Country,
    Gift,
    MealAdditionTemplate,
    Restaurant,
)
from accommodation_shared.results import Result
from .repository import Repository


class AccommodationRepositoryManager:
    """
    Lazily created repositories sharing one session / unit of work.

    Changes staged through any repository are committed together by save().
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    @cached_property
    def countries(self) -> Repository[Country, str]:
        return Repository(Country, self._session)

    @cached_property
    def cities(self) -> Repository[City, str]:
        return Repository(City, self._session)

    @cached_property
    def airports(self) -> Repository[Airport, str]:
        return Repository(Airport, self._session)

    @cached_property
    def gifts(self) -> Repository[Gift, str]:
        return Repository(Gift, self._session)

    @cached_property
    def restaurants(self) -> Repository[Restaurant, str]:
        return Repository(Restaurant, self._session)

    @cached_property
    def meal_addition_templates(self) -> Repository[MealAdditionTemplate, str]:
        return Repository(MealAdditionTemplate, self._session)

    async def save(self) -> Result:
        """Commit everything staged through any of the repositories."""
        # Any repository commits the shared session.
        return await self.countries.save()


def get_repository_manager(session: AsyncSession) -> AccommodationRepositoryManager:
    """Factory function for dependency injection."""
    return AccommodationRepositoryManager(session)
