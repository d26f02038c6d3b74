"""
Location Models: Country, City, Airport.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accommodation_shared.config.constants import Limits
from .base import AuditMixin, Base, new_id


class Country(AuditMixin, Base):
    """Country a city belongs to."""

    __tablename__ = "country"

    id: Mapped[str] = mapped_column(String(Limits.ID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False)
    code: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_CODE_LENGTH), nullable=True)  # "ZA", "KE"


class City(AuditMixin, Base):
    """City within a country."""

    __tablename__ = "city"

    id: Mapped[str] = mapped_column(String(Limits.ID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False)
    country_id: Mapped[Optional[str]] = mapped_column(
        String(Limits.ID_LENGTH),
        ForeignKey("country.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    country: Mapped[Optional["Country"]] = relationship()


class Airport(AuditMixin, Base):
    """
    Airport serving a city.
    The id is fixed at creation; name, code, description and city are editable.
    """

    __tablename__ = "airport"

    id: Mapped[str] = mapped_column(String(Limits.ID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False)
    code: Mapped[str] = mapped_column(String(Limits.MAX_CODE_LENGTH), nullable=False)  # IATA "JNB"
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    city_id: Mapped[Optional[str]] = mapped_column(
        String(Limits.ID_LENGTH),
        ForeignKey("city.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    city: Mapped[Optional["City"]] = relationship()
