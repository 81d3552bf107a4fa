"""
Accommodation Model: a bookable lodging listed by a host.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hospeda_shared.config.constants import (
    AccommodationTypeEnum,
    ModerationStateEnum,
    VisibilityEnum,
)

from .base import AdminInfoMixin, AuditMixin, Base, LifecycleMixin, enum_type, new_id

if TYPE_CHECKING:
    from .destination import Destination


class Accommodation(AuditMixin, LifecycleMixin, AdminInfoMixin, Base):
    """
    Accommodation listing.
    Inherits: created_at, updated_at, deleted_at, *_by_id from AuditMixin.
    """

    __tablename__ = "accommodation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    type: Mapped[AccommodationTypeEnum] = mapped_column(
        enum_type(AccommodationTypeEnum), nullable=False, index=True
    )
    owner_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    destination_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("destination.id", ondelete="SET NULL"), nullable=True, index=True
    )
    visibility: Mapped[VisibilityEnum] = mapped_column(
        enum_type(VisibilityEnum), default=VisibilityEnum.PUBLIC, nullable=False, index=True
    )
    moderation_state: Mapped[ModerationStateEnum] = mapped_column(
        enum_type(ModerationStateEnum), default=ModerationStateEnum.PENDING, nullable=False
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    price: Mapped[Optional[float]] = mapped_column(Float)
    reviews_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Relationships
    destination: Mapped[Optional["Destination"]] = relationship(back_populates="accommodations")

    __table_args__ = (
        # Composite index for destination listings filtered by visibility
        Index("ix_accommodation_destination_visibility", "destination_id", "visibility"),
    )
