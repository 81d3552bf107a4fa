"""
Shared Pydantic schemas: search parameters, pages, small action inputs.
"""

from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hospeda_shared.config.constants import Limits, VisibilityEnum

T = TypeVar("T")


# =============================================================================
# Common Types
# =============================================================================

OrderDirection = Literal["asc", "desc"]


# =============================================================================
# Search / Pagination
# =============================================================================


class SearchParams(BaseModel):
    """
    Pagination, ordering and free-text parameters shared by list, search
    and count. Entity search schemas extend it with optional filters.
    """

    page: int = Field(default=Limits.DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE)
    order_by: str | None = Field(default=None, min_length=1, max_length=64)
    order: OrderDirection = "asc"
    q: str | None = Field(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH)

    def filters(self) -> dict[str, Any]:
        """Entity filters that were provided, without paging fields."""
        return self.model_dump(
            exclude=set(SearchParams.model_fields),
            exclude_none=True,
        )


class PaginatedList(BaseModel, Generic[T]):
    """One page of results."""

    items: list[T]
    total: int
    page: int
    page_size: int


class CountOutput(BaseModel):
    count: int


# =============================================================================
# Action Inputs
# =============================================================================


class IdInput(BaseModel):
    id: str = Field(min_length=1, max_length=36)


class FieldLookupInput(BaseModel):
    """Lookup by a unique field such as slug or name."""

    field: str = Field(min_length=1, max_length=64)
    value: str = Field(min_length=1, max_length=200)


class VisibilityInput(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    visibility: VisibilityEnum


class FeaturedInput(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    is_featured: bool


class AdminInfo(BaseModel):
    """Staff notes attached to an entity."""

    model_config = ConfigDict(extra="forbid")

    notes: str | None = Field(default=None, max_length=Limits.MAX_ADMIN_NOTES_LENGTH)
    favorite: bool = False

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class AdminInfoInput(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    admin_info: AdminInfo


class AdminInfoOutput(BaseModel):
    admin_info: AdminInfo | None = None


# =============================================================================
# Output Mixins
# =============================================================================


class AuditOutput(BaseModel):
    """Audit fields present on every entity output."""

    created_at: datetime
    updated_at: datetime
    created_by_id: str | None = None
    updated_by_id: str | None = None
    deleted_at: datetime | None = None
    deleted_by_id: str | None = None

    class Config:
        from_attributes = True
