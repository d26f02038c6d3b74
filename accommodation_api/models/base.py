"""
Declarative base, audit timestamps and loading helpers shared by all models.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Generate a new string primary key."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AuditMixin:
    """
    Mixin providing audit timestamps for all models.

    Fields added:
    - created_at: set by the database on insert
    - updated_at: set by the database on every update
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = inspect(self).dict.get("id")
        return f"<{class_name}(id={id_val})>"


def loaded_attribute(entity: Any, name: str) -> Any:
    """
    Read an attribute only if it is already loaded.

    Returns None for attributes that would need a lazy load, which is not
    possible on detached instances or outside the async greenlet.
    """
    if name in inspect(entity).unloaded:
        return None
    return getattr(entity, name)
