"""
Result wrappers returned by every repository and service operation.

A result either succeeded (optionally carrying data) or failed with an
ordered list of human-readable messages. Callers branch on ``succeeded``
before reading ``data``.

Usage:
    from accommodation_shared.results import Result, DataResult

    result = await repo.first_or_default(spec)
    if not result.succeeded:
        return DataResult.fail(result.messages)

    return DataResult.success(AirportDto.from_entity(result.data))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from accommodation_shared.utils.exceptions import OperationFailedError

T = TypeVar("T")


def _as_messages(messages: str | Sequence[str] | None) -> list[str]:
    if messages is None:
        return []
    if isinstance(messages, str):
        return [messages]
    return list(messages)


@dataclass
class Result:
    """Outcome of an operation without a payload (e.g. delete, save)."""

    succeeded: bool = False
    messages: list[str] = field(default_factory=list)

    @classmethod
    def success(cls, message: str | None = None) -> Result:
        return cls(succeeded=True, messages=_as_messages(message))

    @classmethod
    def fail(cls, messages: str | Sequence[str] | None = None):
        """Failed result; accepts a single message or a sequence of them."""
        return cls(succeeded=False, messages=_as_messages(messages))

    @property
    def failed(self) -> bool:
        return not self.succeeded

    def raise_for_failure(self) -> None:
        """Raise OperationFailedError if this result failed."""
        if not self.succeeded:
            raise OperationFailedError(self.messages)


@dataclass
class DataResult(Result, Generic[T]):
    """Outcome of an operation that returns data on success."""

    data: T | None = None

    @classmethod
    def success(
        cls,
        data: T | None = None,
        messages: str | Sequence[str] | None = None,
    ) -> DataResult[T]:
        return cls(succeeded=True, messages=_as_messages(messages), data=data)

    def unwrap(self) -> T | None:
        """Return data, raising OperationFailedError if the result failed."""
        self.raise_for_failure()
        return self.data
