"""
Post repository: news and featured finders.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from hospeda_api.models import Post
from hospeda_shared.infrastructure.db import safe_commit

from .base import BaseRepository, PageResult


class PostRepository(BaseRepository[Post]):
    """Data access for posts."""

    def __init__(self, session: Session):
        super().__init__(Post, session)

    def find_news(
        self,
        filters: dict[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> PageResult[Post]:
        """News posts, most recently created first."""
        return self.find_all(
            {**(filters or {}), "is_news": True},
            page=page,
            page_size=page_size,
            order_by="created_at",
            order="desc",
        )

    def find_featured(
        self,
        filters: dict[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> PageResult[Post]:
        return self.find_all(
            {**(filters or {}), "is_featured": True},
            page=page,
            page_size=page_size,
            order_by="created_at",
            order="desc",
        )

    def increment_likes(self, post: Post) -> Post:
        """Add one like. Does not touch updated_by; likes are not edits."""
        post.likes = (post.likes or 0) + 1
        safe_commit(self._session)
        self._session.refresh(post)
        return post

    def decrement_likes(self, post: Post) -> Post:
        """Remove one like, never going below zero."""
        post.likes = max((post.likes or 0) - 1, 0)
        safe_commit(self._session)
        self._session.refresh(post)
        return post
