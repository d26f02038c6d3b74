"""
Generic Repository for database access.

Provides a clean abstraction layer between services and the SQLAlchemy
AsyncSession. Every operation returns a Result / DataResult instead of
raising: persistence errors become failed results carrying the root cause
message, and nothing is written until save() commits the unit of work.

Usage:
    from accommodation_api.repositories import Repository, match_all, match_id

    repo = Repository(Restaurant, db)

    listed = await repo.find_all(match_all(Restaurant))
    found = await repo.first_or_default(match_id(Restaurant, "r1"), track_changes=True)

    await repo.create(Restaurant(id="r2", name="Cafe"))
    saved = await repo.save()
    if not saved.succeeded:
        ...

Tracking:
    track_changes=False  -> instances are refreshed from the database and
                            detached from the session along with their
                            eager-loaded relations (read-only paths)
    track_changes=True   -> instances stay attached; mutations are written
                            by the next save()

Cancellation of the awaiting task is honoured at every await and is never
turned into a failed result.
"""

from __future__ import annotations

import asyncio
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import exists as sql_exists, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import QueryableAttribute
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import Select

from accommodation_api.models import Base
from accommodation_shared.config.constants import Messages
from accommodation_shared.config.logging import get_logger
from accommodation_shared.infrastructure.db import safe_commit
from accommodation_shared.results import DataResult, Result
from .specification import Specification, match_id

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
KeyT = TypeVar("KeyT")


def root_cause_message(exc: BaseException) -> str:
    """
    Message of the innermost exception in the chain.

    Follows DBAPIError.orig and explicit __cause__ links, so a wrapped
    IntegrityError reports the driver's own message.
    """
    root = exc
    seen = {id(root)}
    while True:
        nxt = getattr(root, "orig", None) or root.__cause__
        if not isinstance(nxt, BaseException) or id(nxt) in seen:
            break
        seen.add(id(nxt))
        root = nxt
    return str(root) or root.__class__.__name__


class Repository(Generic[ModelT, KeyT]):
    """
    Repository over one model class with a string or integer key.

    One instance wraps one session; all repositories sharing that session
    share its unit of work.
    """

    def __init__(self, model: type[ModelT], session: AsyncSession):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> AsyncSession:
        """The database session."""
        return self._session

    # =========================================================================
    # Helpers
    # =========================================================================

    def _base_query(self, track_changes: bool) -> Select:
        """Create base select query."""
        query = select(self._model)
        if not track_changes:
            # Untracked reads reflect the database, not identity-map state.
            query = query.execution_options(populate_existing=True)
        return query

    def _apply_specification(self, query: Select, spec: Specification[ModelT]) -> Select:
        """Apply predicate and eager loading options."""
        query = query.where(spec.to_expression())
        options = spec.loader_options()
        if options:
            query = query.options(*options)
        return query

    def _detach(self, entities: Sequence[ModelT]) -> None:
        """Expunge results together with the related objects eager-loaded alongside them."""
        pending = list(entities)
        seen: set[int] = set()
        while pending:
            entity = pending.pop()
            if id(entity) in seen:
                continue
            seen.add(id(entity))

            state = inspect(entity)
            for relationship in state.mapper.relationships:
                if relationship.key in state.unloaded:
                    continue
                related = state.dict.get(relationship.key)
                if related is None:
                    continue
                pending.extend(related if relationship.uselist else [related])

            if entity in self._session:
                self._session.expunge(entity)

    def _fail(self, operation: str, exc: Exception, result_type: type[Result] = DataResult) -> Any:
        message = root_cause_message(exc)
        logger.warning(
            f"Repository {operation} failed",
            entity=self._model.__name__,
            error=message,
        )
        return result_type.fail(message)

    # =========================================================================
    # Read Operations
    # =========================================================================

    async def find_all(
        self,
        spec: Specification[ModelT],
        track_changes: bool = False,
    ) -> DataResult[list[ModelT]]:
        """
        Find all entities matching a specification.

        Args:
            spec: Predicate and eager-load paths.
            track_changes: Keep the instances attached for later save().

        Returns:
            DataResult with the (possibly empty) list of entities.
        """
        try:
            query = self._apply_specification(self._base_query(track_changes), spec)
            entities = list((await self._session.scalars(query)).unique().all())
            if not track_changes:
                self._detach(entities)
            return DataResult.success(entities)
        except Exception as e:
            return self._fail("find_all", e)

    async def first_or_default(
        self,
        spec: Specification[ModelT],
        track_changes: bool = False,
    ) -> DataResult[ModelT | None]:
        """
        Find the first entity matching a specification.

        Returns:
            DataResult whose data is None when nothing matched. A missing
            row is not a failure here; services decide what it means.
        """
        try:
            query = self._apply_specification(self._base_query(track_changes), spec).limit(1)
            entity = (await self._session.scalars(query)).first()
            if entity is not None and not track_changes:
                self._detach([entity])
            return DataResult.success(entity)
        except Exception as e:
            return self._fail("first_or_default", e)

    async def find_by_id(
        self,
        entity_id: KeyT,
        track_changes: bool = False,
        includes: Sequence[Sequence[QueryableAttribute]] = (),
    ) -> DataResult[ModelT | None]:
        """Find entity by primary key, eager-loading the given paths."""
        spec = match_id(self._model, entity_id)
        for path in includes:
            spec.add_include(*path)
        return await self.first_or_default(spec, track_changes)

    async def count(self, spec: Specification[ModelT] | None = None) -> DataResult[int]:
        """Count entities, optionally restricted by a specification."""
        try:
            query = select(func.count()).select_from(self._model)
            if spec is not None:
                query = query.where(spec.to_expression())
            return DataResult.success(await self._session.scalar(query) or 0)
        except Exception as e:
            return self._fail("count", e)

    async def exists(self, entity_id: KeyT) -> DataResult[bool]:
        """Check if entity exists by ID."""
        try:
            query = select(sql_exists().where(self._model.id == entity_id))
            return DataResult.success(bool(await self._session.scalar(query)))
        except Exception as e:
            return self._fail("exists", e)

    # =========================================================================
    # Write Operations (staged until save)
    # =========================================================================

    async def create(self, entity: ModelT) -> DataResult[ModelT]:
        """Stage a new entity for insertion."""
        try:
            self._session.add(entity)
            return DataResult.success(entity)
        except Exception as e:
            return self._fail("create", e)

    async def create_range(self, entities: Sequence[ModelT]) -> Result:
        """Stage several new entities for insertion."""
        try:
            self._session.add_all(entities)
            return Result.success()
        except Exception as e:
            return self._fail("create_range", e, Result)

    def update(self, entity: ModelT) -> DataResult[ModelT]:
        """
        Stage changes to an entity.

        Tracked instances are already staged; detached ones are re-attached.
        """
        try:
            if entity not in self._session:
                self._session.add(entity)
            return DataResult.success(entity)
        except Exception as e:
            return self._fail("update", e)

    def update_range(self, entities: Sequence[ModelT]) -> Result:
        """Stage changes to several entities."""
        for entity in entities:
            result = self.update(entity)
            if not result.succeeded:
                return Result.fail(result.messages)
        return Result.success()

    async def delete(self, entity_id: KeyT) -> Result:
        """
        Stage removal of the entity with the given key.

        Fails when no such entity exists. The row is removed by save().
        """
        try:
            entity = await self._session.get(self._model, entity_id)
            if entity is None:
                return Result.fail(
                    Messages.KEY_NOT_FOUND.format(entity=self._model.__name__, entity_id=entity_id)
                )
            await self._session.delete(entity)
            return Result.success()
        except Exception as e:
            return self._fail("delete", e, Result)

    async def remove(self, entity: ModelT) -> Result:
        """Stage removal of a loaded entity."""
        try:
            await self._session.delete(entity)
            return Result.success()
        except Exception as e:
            return self._fail("remove", e, Result)

    async def remove_range(self, entities: Sequence[ModelT]) -> Result:
        """Stage removal of several loaded entities."""
        for entity in entities:
            result = await self.remove(entity)
            if not result.succeeded:
                return result
        return Result.success()

    # =========================================================================
    # Unit of Work
    # =========================================================================

    async def save(self) -> Result:
        """
        Commit all staged changes atomically.

        Any failure rolls back the whole unit of work. A concurrency
        conflict is reported with a fixed message.
        """
        try:
            await safe_commit(self._session)
            return Result.success()
        except StaleDataError:
            logger.warning("Repository save hit a concurrency conflict", entity=self._model.__name__)
            return Result.fail(Messages.CONCURRENCY_CONFLICT)
        except asyncio.CancelledError:
            logger.warning("Repository save cancelled, changes rolled back", entity=self._model.__name__)
            raise
        except Exception as e:
            return self._fail("save", e, Result)
