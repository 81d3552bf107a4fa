"""
Destination Model: a city or region that groups accommodations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hospeda_shared.config.constants import VisibilityEnum

from .base import AdminInfoMixin, AuditMixin, Base, LifecycleMixin, enum_type, new_id

if TYPE_CHECKING:
    from .accommodation import Accommodation


class Destination(AuditMixin, LifecycleMixin, AdminInfoMixin, Base):
    """
    Tourist destination.
    Inherits: created_at, updated_at, deleted_at, *_by_id from AuditMixin.
    """

    __tablename__ = "destination"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[Optional[str]] = mapped_column(Text)
    visibility: Mapped[VisibilityEnum] = mapped_column(
        enum_type(VisibilityEnum), default=VisibilityEnum.PUBLIC, nullable=False, index=True
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    accommodations_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    accommodations: Mapped[list["Accommodation"]] = relationship(back_populates="destination")
