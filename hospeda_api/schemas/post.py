"""
Post schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from hospeda_shared.config.constants import (
    LifecycleStatusEnum,
    Limits,
    PostCategoryEnum,
    VisibilityEnum,
)

from .base import AuditOutput, SearchParams


class PostCreate(BaseModel):
    title: str = Field(min_length=Limits.MIN_NAME_LENGTH, max_length=150)
    summary: str = Field(min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    content: str = Field(min_length=1, max_length=20000)
    category: PostCategoryEnum
    author_id: str | None = Field(default=None, max_length=36)
    slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    is_news: bool = False
    visibility: VisibilityEnum = VisibilityEnum.PUBLIC
    lifecycle_state: LifecycleStatusEnum = LifecycleStatusEnum.DRAFT


class PostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=Limits.MIN_NAME_LENGTH, max_length=150)
    summary: str | None = Field(default=None, min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    content: str | None = Field(default=None, min_length=1, max_length=20000)
    category: PostCategoryEnum | None = None
    is_news: bool | None = None


class PostSearch(SearchParams):
    category: PostCategoryEnum | None = None
    author_id: str | None = None
    visibility: VisibilityEnum | None = None
    is_news: bool | None = None
    is_featured: bool | None = None


class PostByCategoryInput(SearchParams):
    category: PostCategoryEnum


class PostOutput(AuditOutput):
    id: str
    slug: str
    title: str
    summary: str
    content: str
    category: PostCategoryEnum
    author_id: str | None = None
    visibility: VisibilityEnum
    lifecycle_state: LifecycleStatusEnum
    is_featured: bool
    is_news: bool
    published_at: datetime | None = None
    likes: int


class PostSummary(BaseModel):
    id: str
    slug: str
    title: str
    summary: str
    category: PostCategoryEnum
    is_featured: bool
    is_news: bool
    author_id: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class PostStats(BaseModel):
    likes: int
