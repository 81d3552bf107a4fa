"""
Destination schemas.
"""

from pydantic import BaseModel, Field

from hospeda_shared.config.constants import LifecycleStatusEnum, Limits, VisibilityEnum

from .base import AuditOutput, SearchParams


class DestinationCreate(BaseModel):
    name: str = Field(min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    summary: str = Field(min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    country: str = Field(min_length=2, max_length=60)
    city: str | None = Field(default=None, max_length=100)
    slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    visibility: VisibilityEnum = VisibilityEnum.PUBLIC
    lifecycle_state: LifecycleStatusEnum = LifecycleStatusEnum.ACTIVE


class DestinationUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    summary: str | None = Field(default=None, min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    country: str | None = Field(default=None, min_length=2, max_length=60)
    city: str | None = Field(default=None, max_length=100)


class DestinationSearch(SearchParams):
    country: str | None = None
    city: str | None = None
    visibility: VisibilityEnum | None = None
    is_featured: bool | None = None


class DestinationOutput(AuditOutput):
    id: str
    slug: str
    name: str
    summary: str
    description: str | None = None
    country: str
    city: str | None = None
    visibility: VisibilityEnum
    lifecycle_state: LifecycleStatusEnum
    is_featured: bool
    accommodations_count: int


class DestinationSummary(BaseModel):
    id: str
    slug: str
    name: str
    country: str
    city: str | None = None
    accommodations_count: int

    class Config:
        from_attributes = True


class DestinationStats(BaseModel):
    accommodations_count: int
    average_rating: float
