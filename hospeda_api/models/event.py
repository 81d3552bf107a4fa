"""
Event Model: a dated happening at a destination.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda_shared.config.constants import EventCategoryEnum, VisibilityEnum

from .base import AdminInfoMixin, AuditMixin, Base, LifecycleMixin, enum_type, new_id


class Event(AuditMixin, LifecycleMixin, AdminInfoMixin, Base):
    """
    Event published by an organizer or editor.
    Inherits: created_at, updated_at, deleted_at, *_by_id from AuditMixin.
    """

    __tablename__ = "event"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[EventCategoryEnum] = mapped_column(
        enum_type(EventCategoryEnum), nullable=False, index=True
    )
    author_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    city: Mapped[Optional[str]] = mapped_column(Text)
    # None means the event is free
    price: Mapped[Optional[float]] = mapped_column(Float)
    visibility: Mapped[VisibilityEnum] = mapped_column(
        enum_type(VisibilityEnum), default=VisibilityEnum.PUBLIC, nullable=False, index=True
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
