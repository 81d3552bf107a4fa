"""
Event schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from hospeda_shared.config.constants import (
    EventCategoryEnum,
    LifecycleStatusEnum,
    Limits,
    VisibilityEnum,
)

from .base import AuditOutput, SearchParams


class EventCreate(BaseModel):
    name: str = Field(min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    summary: str = Field(min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    category: EventCategoryEnum
    start_date: datetime
    end_date: datetime | None = None
    city: str | None = Field(default=None, max_length=100)
    price: float | None = Field(default=None, ge=0)
    author_id: str | None = Field(default=None, max_length=36)
    slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    visibility: VisibilityEnum = VisibilityEnum.PUBLIC
    lifecycle_state: LifecycleStatusEnum = LifecycleStatusEnum.ACTIVE


class EventUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    summary: str | None = Field(default=None, min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    category: EventCategoryEnum | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    city: str | None = Field(default=None, max_length=100)
    price: float | None = Field(default=None, ge=0)


class EventSearch(SearchParams):
    category: EventCategoryEnum | None = None
    author_id: str | None = None
    city: str | None = None
    visibility: VisibilityEnum | None = None
    is_featured: bool | None = None


class EventByAuthorInput(SearchParams):
    author_id: str = Field(min_length=1, max_length=36)


class EventByCategoryInput(SearchParams):
    category: EventCategoryEnum


class EventUpcomingInput(SearchParams):
    days_ahead: int = Field(default=Limits.DEFAULT_DAYS_AHEAD, ge=1, le=Limits.MAX_DAYS_AHEAD)
    category: EventCategoryEnum | None = None
    city: str | None = None


class EventByLocationInput(SearchParams):
    city: str = Field(min_length=1, max_length=100)


class EventOutput(AuditOutput):
    id: str
    slug: str
    name: str
    summary: str
    description: str | None = None
    category: EventCategoryEnum
    author_id: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    city: str | None = None
    price: float | None = None
    visibility: VisibilityEnum
    lifecycle_state: LifecycleStatusEnum
    is_featured: bool


class EventSummary(BaseModel):
    id: str
    slug: str
    name: str
    category: EventCategoryEnum
    start_date: datetime
    city: str | None = None
    is_free: bool
