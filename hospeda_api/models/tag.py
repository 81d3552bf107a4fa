"""
Tag Models: Tag and the polymorphic EntityTag link.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda_shared.config.constants import EntityTypeEnum

from .base import AdminInfoMixin, AuditMixin, Base, LifecycleMixin, enum_type, new_id, utcnow


class Tag(AuditMixin, LifecycleMixin, AdminInfoMixin, Base):
    """
    Free-form label attachable to any taggable entity.
    Inherits: created_at, updated_at, deleted_at, *_by_id from AuditMixin.
    """

    __tablename__ = "tag"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)


class EntityTag(Base):
    """
    Tag assignment. entity_id is not a foreign key because the target
    table depends on entity_type.
    """

    __tablename__ = "entity_tag"

    tag_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True
    )
    entity_id: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)
    entity_type: Mapped[EntityTypeEnum] = mapped_column(
        enum_type(EntityTypeEnum), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    created_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    def __repr__(self) -> str:
        return f"<EntityTag(tag_id={self.tag_id}, {self.entity_type.value}:{self.entity_id})>"
