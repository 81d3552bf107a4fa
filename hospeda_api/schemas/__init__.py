"""
Pydantic schemas for service inputs and outputs.

Per entity:
- {Entity}Create: create input (no id or audit fields)
- {Entity}Update: partial update input
- {Entity}Search: SearchParams plus optional filters
- {Entity}Output: full record including audit fields
"""

from .base import (
    SearchParams,
    PaginatedList,
    CountOutput,
    IdInput,
    FieldLookupInput,
    VisibilityInput,
    FeaturedInput,
    AdminInfo,
    AdminInfoInput,
    AdminInfoOutput,
    AuditOutput,
)
from .accommodation import (
    AccommodationCreate,
    AccommodationUpdate,
    AccommodationSearch,
    AccommodationByDestinationInput,
    AccommodationByTypeInput,
    TopRatedInput,
    SimilarInput,
    AccommodationOutput,
    AccommodationSummary,
)
from .destination import (
    DestinationCreate,
    DestinationUpdate,
    DestinationSearch,
    DestinationOutput,
    DestinationSummary,
    DestinationStats,
)
from .event import (
    EventCreate,
    EventUpdate,
    EventSearch,
    EventByAuthorInput,
    EventByCategoryInput,
    EventUpcomingInput,
    EventByLocationInput,
    EventOutput,
    EventSummary,
)
from .post import (
    PostCreate,
    PostUpdate,
    PostSearch,
    PostByCategoryInput,
    PostOutput,
    PostSummary,
    PostStats,
)
from .tag import (
    TagCreate,
    TagUpdate,
    TagSearch,
    TagOutput,
    EntityTagInput,
    EntityRefInput,
    TagEntitiesInput,
    EntityTagOutput,
    PopularTagsInput,
    PopularTagOutput,
)

__all__ = [
    # Shared
    "SearchParams",
    "PaginatedList",
    "CountOutput",
    "IdInput",
    "FieldLookupInput",
    "VisibilityInput",
    "FeaturedInput",
    "AdminInfo",
    "AdminInfoInput",
    "AdminInfoOutput",
    "AuditOutput",
    # Accommodation
    "AccommodationCreate",
    "AccommodationUpdate",
    "AccommodationSearch",
    "AccommodationByDestinationInput",
    "AccommodationByTypeInput",
    "TopRatedInput",
    "SimilarInput",
    "AccommodationOutput",
    "AccommodationSummary",
    # Destination
    "DestinationCreate",
    "DestinationUpdate",
    "DestinationSearch",
    "DestinationOutput",
    "DestinationSummary",
    "DestinationStats",
    # Event
    "EventCreate",
    "EventUpdate",
    "EventSearch",
    "EventByAuthorInput",
    "EventByCategoryInput",
    "EventUpcomingInput",
    "EventByLocationInput",
    "EventOutput",
    "EventSummary",
    # Post
    "PostCreate",
    "PostUpdate",
    "PostSearch",
    "PostByCategoryInput",
    "PostOutput",
    "PostSummary",
    "PostStats",
    # Tag
    "TagCreate",
    "TagUpdate",
    "TagSearch",
    "TagOutput",
    "EntityTagInput",
    "EntityRefInput",
    "TagEntitiesInput",
    "EntityTagOutput",
    "PopularTagsInput",
    "PopularTagOutput",
]
