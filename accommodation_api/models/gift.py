"""
Gift Model.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from accommodation_shared.config.constants import Limits
from .base import AuditMixin, Base, new_id


class Gift(AuditMixin, Base):
    """Gift that can be offered with a booking (welcome basket, wine, etc.)."""

    __tablename__ = "gift"

    id: Mapped[str] = mapped_column(String(Limits.ID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
