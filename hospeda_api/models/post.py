"""
Post Model: editorial content (articles, news, tips).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda_shared.config.constants import PostCategoryEnum, VisibilityEnum

from .base import AdminInfoMixin, AuditMixin, Base, LifecycleMixin, enum_type, new_id


class Post(AuditMixin, LifecycleMixin, AdminInfoMixin, Base):
    """
    Blog post or news item.
    Inherits: created_at, updated_at, deleted_at, *_by_id from AuditMixin.
    """

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[PostCategoryEnum] = mapped_column(
        enum_type(PostCategoryEnum), nullable=False, index=True
    )
    author_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    visibility: Mapped[VisibilityEnum] = mapped_column(
        enum_type(VisibilityEnum), default=VisibilityEnum.PUBLIC, nullable=False, index=True
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_news: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
