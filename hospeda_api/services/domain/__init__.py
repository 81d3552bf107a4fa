"""
Domain services: one BaseCRUDService subclass per entity.
"""

from .accommodation_service import AccommodationService, ACCOMMODATION_POLICIES
from .destination_service import DestinationService, DESTINATION_POLICIES
from .event_service import EventService, EVENT_POLICIES
from .post_service import PostService, POST_POLICIES
from .tag_service import TagService, TAG_POLICIES

__all__ = [
    "AccommodationService",
    "ACCOMMODATION_POLICIES",
    "DestinationService",
    "DESTINATION_POLICIES",
    "EventService",
    "EVENT_POLICIES",
    "PostService",
    "POST_POLICIES",
    "TagService",
    "TAG_POLICIES",
]
