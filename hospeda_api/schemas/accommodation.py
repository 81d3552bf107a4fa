"""
Accommodation schemas.
"""

from pydantic import BaseModel, Field

from hospeda_shared.config.constants import (
    AccommodationTypeEnum,
    LifecycleStatusEnum,
    Limits,
    ModerationStateEnum,
    VisibilityEnum,
)

from .base import AuditOutput, SearchParams


class AccommodationCreate(BaseModel):
    name: str = Field(min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    summary: str = Field(min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    type: AccommodationTypeEnum
    slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    owner_id: str | None = Field(default=None, max_length=36)
    destination_id: str | None = Field(default=None, max_length=36)
    visibility: VisibilityEnum = VisibilityEnum.PUBLIC
    lifecycle_state: LifecycleStatusEnum = LifecycleStatusEnum.ACTIVE
    price: float | None = Field(default=None, ge=0)


class AccommodationUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    summary: str | None = Field(default=None, min_length=10, max_length=Limits.MAX_SUMMARY_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    type: AccommodationTypeEnum | None = None
    destination_id: str | None = Field(default=None, max_length=36)
    price: float | None = Field(default=None, ge=0)


class AccommodationSearch(SearchParams):
    type: AccommodationTypeEnum | None = None
    destination_id: str | None = None
    owner_id: str | None = None
    visibility: VisibilityEnum | None = None
    is_featured: bool | None = None


class AccommodationByDestinationInput(SearchParams):
    destination_id: str = Field(min_length=1, max_length=36)


class AccommodationByTypeInput(SearchParams):
    type: AccommodationTypeEnum


class TopRatedInput(BaseModel):
    limit: int = Field(default=10, ge=1, le=50)
    destination_id: str | None = None


class SimilarInput(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    limit: int = Field(
        default=Limits.DEFAULT_RANKED_LIMIT,
        ge=1,
        le=Limits.MAX_RANKED_LIMIT,
    )


class AccommodationOutput(AuditOutput):
    id: str
    slug: str
    name: str
    summary: str
    description: str | None = None
    type: AccommodationTypeEnum
    owner_id: str | None = None
    destination_id: str | None = None
    visibility: VisibilityEnum
    moderation_state: ModerationStateEnum
    lifecycle_state: LifecycleStatusEnum
    is_featured: bool
    price: float | None = None
    reviews_count: int
    average_rating: float


class AccommodationSummary(BaseModel):
    id: str
    slug: str
    name: str
    type: AccommodationTypeEnum
    average_rating: float
    reviews_count: int
    destination_id: str | None = None

    class Config:
        from_attributes = True
