"""
Base Service Classes for the accommodation application layer.

Provides abstract base classes for entity services that:
- Use Repository + Specification for data access (no direct queries)
- Map entities to DTOs through a to_output hook
- Return Result / DataResult wrappers, never raising for expected failures
- Short-circuit on the first failed step, passing its messages through

Architecture:
    Caller (web layer) → Service → Repository → AsyncSession → Model

Usage:
    from accommodation_api.services.base_service import BaseCRUDService

    class GiftService(BaseCRUDService[Gift, GiftDto]):
        def __init__(self, db: AsyncSession):
            super().__init__(db=db, model=Gift, entity_name="Gift")

        def to_output(self, entity: Gift) -> GiftDto:
            return GiftDto.from_entity(entity)
        ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import QueryableAttribute

from accommodation_api.models import Base
from accommodation_api.repositories import Repository, Specification, match_all, match_id
from accommodation_shared.config.constants import Messages
from accommodation_shared.config.logging import get_logger
from accommodation_shared.results import DataResult, Result

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(ABC, Generic[ModelT]):
    """
    Abstract base service for domain operations.

    Subclasses implement specific business logic while this class
    provides common infrastructure (repository access, logging).
    """

    def __init__(self, db: AsyncSession, model: type[ModelT]):
        self._db = db
        self._model = model
        self._repo: Repository[ModelT, str] = Repository(model, db)

    @property
    def db(self) -> AsyncSession:
        """Database session."""
        return self._db

    @property
    def repo(self) -> Repository[ModelT, str]:
        """Repository for data access."""
        return self._repo


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for entities with the list / get / create / update / delete contract.

    Every read applies the service's include paths, so the DTO returned by
    create() and update() equals what get_by_id() returns afterwards.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelT],
        entity_name: str,
        *,
        includes: Sequence[Sequence[QueryableAttribute]] = (),
    ):
        super().__init__(db, model)
        self._entity_name = entity_name
        self._includes = tuple(tuple(path) for path in includes)

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    def not_found_message(self, entity_id: Any) -> str:
        return Messages.NOT_FOUND.format(entity=self._entity_name, entity_id=entity_id)

    # =========================================================================
    # Specifications
    # =========================================================================

    def _with_includes(self, spec: Specification[ModelT]) -> Specification[ModelT]:
        for path in self._includes:
            spec.add_include(*path)
        return spec

    def _all_spec(self) -> Specification[ModelT]:
        return self._with_includes(match_all(self._model))

    def _id_spec(self, entity_id: Any) -> Specification[ModelT]:
        return self._with_includes(match_id(self._model, entity_id))

    # =========================================================================
    # Read Operations
    # =========================================================================

    async def list_all(self) -> DataResult[list[OutputT]]:
        """List every entity, mapped to DTOs. An empty store is a success."""
        return await self._list(self._all_spec())

    async def get_by_id(self, entity_id: str) -> DataResult[OutputT]:
        """
        Get entity by ID.

        Returns:
            DataResult with the DTO, or a failure naming the entity and id
            when no row matches.
        """
        result = await self._repo.first_or_default(self._id_spec(entity_id))
        if not result.succeeded:
            return self._propagate("get", result, entity_id=entity_id)

        if result.data is None:
            logger.info(f"{self._entity_name} not found", entity_id=entity_id)
            return DataResult.fail(self.not_found_message(entity_id))

        return DataResult.success(self.to_output(result.data))

    async def _list(self, spec: Specification[ModelT]) -> DataResult[list[OutputT]]:
        result = await self._repo.find_all(spec)
        if not result.succeeded:
            return self._propagate("list", result)
        return DataResult.success([self.to_output(e) for e in result.data])

    # =========================================================================
    # Write Operations
    # =========================================================================

    async def create(self, dto: OutputT) -> DataResult[OutputT]:
        """
        Create a new entity from a DTO.

        Stages the entity, commits, then re-reads it with the service's
        includes.
        """
        entity = self._build_entity(dto)

        create_result = await self._repo.create(entity)
        if not create_result.succeeded:
            return self._propagate("create", create_result, entity_id=entity.id)

        save_result = await self._repo.save()
        if not save_result.succeeded:
            return self._propagate("create", save_result, entity_id=entity.id)

        logger.info(f"{self._entity_name} created", entity_id=entity.id)
        return await self.get_by_id(entity.id)

    async def update(self, dto: OutputT) -> DataResult[OutputT]:
        """
        Update an existing entity from a DTO identified by its id.

        The entity is re-fetched with tracking so the session writes the
        copied fields on save.
        """
        entity_id = self._dto_id(dto)

        result = await self._repo.first_or_default(
            match_id(self._model, entity_id), track_changes=True
        )
        if not result.succeeded:
            return self._propagate("update", result, entity_id=entity_id)

        entity = result.data
        if entity is None:
            logger.info(f"{self._entity_name} not found for update", entity_id=entity_id)
            return DataResult.fail(self.not_found_message(entity_id))

        self._apply_changes(entity, dto)

        update_result = self._repo.update(entity)
        if not update_result.succeeded:
            return self._propagate("update", update_result, entity_id=entity_id)

        save_result = await self._repo.save()
        if not save_result.succeeded:
            return self._propagate("update", save_result, entity_id=entity_id)

        logger.info(f"{self._entity_name} updated", entity_id=entity_id)

        reloaded = await self.get_by_id(entity_id)
        if not reloaded.succeeded:
            return reloaded
        return DataResult.success(
            reloaded.data,
            Messages.UPDATED.format(entity=self._entity_name, entity_id=entity_id),
        )

    async def delete(self, entity_id: str) -> Result:
        """
        Delete entity by ID.

        The repository only stages the removal; it is committed here.
        """
        delete_result = await self._repo.delete(entity_id)
        if not delete_result.succeeded:
            return self._propagate("delete", delete_result, Result, entity_id=entity_id)

        save_result = await self._repo.save()
        if not save_result.succeeded:
            return self._propagate("delete", save_result, Result, entity_id=entity_id)

        logger.info(f"{self._entity_name} removed", entity_id=entity_id)
        return Result.success(
            Messages.REMOVED.format(entity=self._entity_name, entity_id=entity_id)
        )

    # =========================================================================
    # Transformation Hooks (override in subclasses)
    # =========================================================================

    @abstractmethod
    def to_output(self, entity: ModelT) -> OutputT:
        """Convert entity to output DTO."""
        ...

    @abstractmethod
    def _build_entity(self, dto: OutputT) -> ModelT:
        """Construct a new entity from a DTO."""
        ...

    @abstractmethod
    def _apply_changes(self, entity: ModelT, dto: OutputT) -> None:
        """Copy the mutable fields of a DTO onto a tracked entity."""
        ...

    def _dto_id(self, dto: OutputT) -> str:
        return dto.id

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _propagate(
        self,
        operation: str,
        failed: Result,
        result_type: type[Result] = DataResult,
        **log_context: Any,
    ) -> Any:
        """Return a failure carrying the failed step's messages unchanged."""
        logger.warning(
            f"{self._entity_name} {operation} failed",
            messages=failed.messages,
            **log_context,
        )
        return result_type.fail(failed.messages)
