"""
Specification Pattern for repository queries.

A specification is a predicate over one model plus the relationship paths
to eager-load alongside it. Repositories translate it into a SELECT; callers
never build persistence-engine queries themselves.

Usage:
    from accommodation_api.repositories.specification import (
        ExpressionSpecification,
        match_all,
        match_id,
    )

    spec = match_id(Airport, airport_id).add_include(Airport.city, City.country)
    result = await repo.first_or_default(spec)

    by_restaurant = ExpressionSpecification(
        MealAdditionTemplate, lambda m: m.restaurant_id == restaurant_id
    )
    breakfasts = by_restaurant & ExpressionSpecification(
        MealAdditionTemplate, lambda m: m.meal_type == MealType.BREAKFAST
    )

Composition via &, | and ~ combines predicates and keeps the union of
both sides' include paths.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Sequence, TypeVar

from sqlalchemy import and_, not_, or_, true
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import QueryableAttribute

ModelT = TypeVar("ModelT")

IncludePath = tuple[QueryableAttribute, ...]


def _path_key(path: IncludePath) -> tuple[tuple[type, str], ...]:
    # Attributes overload ==, so paths are compared by (class, key) pairs.
    return tuple((attr.class_, attr.key) for attr in path)


class Specification(Generic[ModelT]):
    """
    Base class for query specifications.

    Subclass this and implement to_expression() to create
    reusable query building blocks.
    """

    def __init__(self, model: type[ModelT]):
        self._model = model
        self._includes: list[IncludePath] = []

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class the predicate applies to."""
        return self._model

    @property
    def includes(self) -> tuple[IncludePath, ...]:
        """Eager-load paths, in the order they were added."""
        return tuple(self._includes)

    def to_expression(self) -> Any:
        """
        Convert specification to SQLAlchemy expression.

        Must be implemented by subclasses.
        """
        raise NotImplementedError

    def add_include(self, *path: QueryableAttribute) -> Specification[ModelT]:
        """
        Eager-load a relationship path, e.g. ``add_include(Airport.city, City.country)``.

        Returns self for chaining. A path that is already present is ignored.
        """
        if not path:
            raise ValueError("An include path needs at least one relationship attribute")
        self._merge_includes([tuple(path)])
        return self

    def loader_options(self) -> list[Any]:
        """Translate include paths into selectinload chains."""
        options = []
        for path in self._includes:
            option = selectinload(path[0])
            for attr in path[1:]:
                option = option.selectinload(attr)
            options.append(option)
        return options

    def _merge_includes(self, paths: Sequence[IncludePath]) -> None:
        known = {_path_key(p) for p in self._includes}
        for path in paths:
            key = _path_key(path)
            if key not in known:
                self._includes.append(path)
                known.add(key)

    def __and__(self, other: Specification[ModelT]) -> AndSpecification[ModelT]:
        """Combine with AND."""
        return AndSpecification(self, other)

    def __or__(self, other: Specification[ModelT]) -> OrSpecification[ModelT]:
        """Combine with OR."""
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification[ModelT]:
        """Negate specification."""
        return NotSpecification(self)


class ExpressionSpecification(Specification[ModelT]):
    """
    Specification from a callable that receives the model class.

    ExpressionSpecification(Gift, lambda g: g.name.ilike("%wine%"))
    """

    def __init__(self, model: type[ModelT], criteria: Callable[[type[ModelT]], Any]):
        super().__init__(model)
        self._criteria = criteria

    def to_expression(self) -> Any:
        return self._criteria(self._model)


class _BinarySpecification(Specification[ModelT]):
    def __init__(self, left: Specification[ModelT], right: Specification[ModelT]):
        if left.model is not right.model:
            raise TypeError(
                f"Cannot combine specifications for {left.model.__name__} "
                f"and {right.model.__name__}"
            )
        super().__init__(left.model)
        self._left = left
        self._right = right
        self._merge_includes(left.includes + right.includes)


class AndSpecification(_BinarySpecification[ModelT]):
    """AND combination of two specifications."""

    def to_expression(self) -> Any:
        return and_(self._left.to_expression(), self._right.to_expression())


class OrSpecification(_BinarySpecification[ModelT]):
    """OR combination of two specifications."""

    def to_expression(self) -> Any:
        return or_(self._left.to_expression(), self._right.to_expression())


class NotSpecification(Specification[ModelT]):
    """Negation of a specification."""

    def __init__(self, spec: Specification[ModelT]):
        super().__init__(spec.model)
        self._spec = spec
        self._merge_includes(spec.includes)

    def to_expression(self) -> Any:
        return not_(self._spec.to_expression())


def match_all(model: type[ModelT]) -> ExpressionSpecification[ModelT]:
    """Specification matching every row of the model."""
    return ExpressionSpecification(model, lambda m: true())


def match_id(model: type[ModelT], entity_id: Any) -> ExpressionSpecification[ModelT]:
    """Specification matching the row whose primary key equals entity_id."""
    return ExpressionSpecification(model, lambda m: m.id == entity_id)
