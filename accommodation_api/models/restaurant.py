"""
Restaurant Models: Restaurant, MealAdditionTemplate.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Enum as SQLEnum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accommodation_shared.config.constants import GuestType, Limits, MealType
from .base import AuditMixin, Base, new_id


class Restaurant(AuditMixin, Base):
    """Restaurant that serves meal additions."""

    __tablename__ = "restaurant"

    id: Mapped[str] = mapped_column(String(Limits.ID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class MealAdditionTemplate(AuditMixin, Base):
    """
    Reusable meal addition: which meal, for which guests, at which restaurant.
    """

    __tablename__ = "meal_addition_template"

    id: Mapped[str] = mapped_column(String(Limits.ID_LENGTH), primary_key=True, default=new_id)
    guest_type: Mapped[GuestType] = mapped_column(
        SQLEnum(GuestType, name="guest_type"), nullable=False, default=GuestType.ALL
    )
    meal_type: Mapped[MealType] = mapped_column(
        SQLEnum(MealType, name="meal_type"), nullable=False
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    restaurant_id: Mapped[Optional[str]] = mapped_column(
        String(Limits.ID_LENGTH),
        ForeignKey("restaurant.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    restaurant: Mapped[Optional["Restaurant"]] = relationship()
