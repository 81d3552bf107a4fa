"""
Tag schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from hospeda_shared.config.constants import EntityTypeEnum, LifecycleStatusEnum, Limits

from .base import AuditOutput, SearchParams


class TagCreate(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    color: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")  # Hex color
    notes: str | None = Field(default=None, max_length=300)
    slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    lifecycle_state: LifecycleStatusEnum = LifecycleStatusEnum.ACTIVE


class TagUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    color: str | None = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    notes: str | None = Field(default=None, max_length=300)


class TagSearch(SearchParams):
    color: str | None = None


class TagOutput(AuditOutput):
    id: str
    slug: str
    name: str
    color: str
    notes: str | None = None
    lifecycle_state: LifecycleStatusEnum


class EntityTagInput(BaseModel):
    tag_id: str = Field(min_length=1, max_length=36)
    entity_id: str = Field(min_length=1, max_length=36)
    entity_type: EntityTypeEnum


class EntityRefInput(BaseModel):
    entity_id: str = Field(min_length=1, max_length=36)
    entity_type: EntityTypeEnum


class TagEntitiesInput(BaseModel):
    tag_id: str = Field(min_length=1, max_length=36)
    entity_type: EntityTypeEnum | None = None


class EntityTagOutput(BaseModel):
    tag_id: str
    entity_id: str
    entity_type: EntityTypeEnum
    created_at: datetime
    created_by_id: str | None = None

    class Config:
        from_attributes = True


class PopularTagsInput(BaseModel):
    limit: int = Field(
        default=Limits.DEFAULT_RANKED_LIMIT,
        ge=1,
        le=Limits.MAX_RANKED_LIMIT,
    )


class PopularTagOutput(BaseModel):
    """A tag with the number of entities it is assigned to."""

    tag: TagOutput
    usage_count: int
