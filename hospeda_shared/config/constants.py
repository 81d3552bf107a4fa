"""
Centralized constants for the backend application.

Usage:
    from hospeda_shared.config.constants import Headers, Limits

    actor_id = request.headers.get(Headers.ACTOR_ID)
"""

from enum import Enum
from typing import Final


# =============================================================================
# HTTP Headers
# =============================================================================


class Headers:
    """Request headers read by the API boundary."""

    REQUEST_ID: Final[str] = "X-Request-ID"

    # Actor headers stand in for a real authentication layer
    ACTOR_ID: Final[str] = "X-Actor-Id"
    ACTOR_ROLE: Final[str] = "X-Actor-Role"
    ACTOR_PERMISSIONS: Final[str] = "X-Actor-Permissions"
    ACTOR_STATE: Final[str] = "X-Actor-State"


# =============================================================================
# Error Messages
# =============================================================================


# Only message ever surfaced for INTERNAL_ERROR; the real cause goes to the logs
INTERNAL_ERROR_MESSAGE: Final[str] = "An unexpected error occurred."

NO_VALID_UPDATE_FIELDS_MESSAGE: Final[str] = "No valid fields provided for update."

INVALID_INPUT_MESSAGE: Final[str] = "Invalid input"


# =============================================================================
# Logging
# =============================================================================


# Input keys whose values never reach the logs
SENSITIVE_LOG_KEYS: Final[frozenset[str]] = frozenset({
    "password",
    "token",
    "secret",
    "authorization",
    "api_key",
})

REDACTED: Final[str] = "***"


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits."""

    # String lengths
    MIN_NAME_LENGTH: Final[int] = 3
    MAX_NAME_LENGTH: Final[int] = 100
    MAX_SUMMARY_LENGTH: Final[int] = 300
    MAX_DESCRIPTION_LENGTH: Final[int] = 5000
    MAX_SLUG_LENGTH: Final[int] = 120
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100
    MAX_ADMIN_NOTES_LENGTH: Final[int] = 500

    # Pagination defaults
    DEFAULT_PAGE: Final[int] = 1
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 100

    # Ratings
    MIN_RATING: Final[float] = 0.0
    MAX_RATING: Final[float] = 5.0

    # Upcoming events window
    DEFAULT_DAYS_AHEAD: Final[int] = 30
    MAX_DAYS_AHEAD: Final[int] = 365

    # Short ranked lists (similar, popular)
    DEFAULT_RANKED_LIMIT: Final[int] = 10
    MAX_RANKED_LIMIT: Final[int] = 100


# =============================================================================
# Entity State Enums
# =============================================================================


class LifecycleStatusEnum(str, Enum):
    """Coarse entity status, independent of soft delete and visibility."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class VisibilityEnum(str, Enum):
    """Who can see an entity."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    DRAFT = "DRAFT"


class ModerationStateEnum(str, Enum):
    """Moderation review status."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# =============================================================================
# Domain Enums
# =============================================================================


class AccommodationTypeEnum(str, Enum):
    """Accommodation type enum."""

    HOTEL = "HOTEL"
    HOSTEL = "HOSTEL"
    CABIN = "CABIN"
    APARTMENT = "APARTMENT"
    CAMPING = "CAMPING"
    HOUSE = "HOUSE"
    ROOM = "ROOM"


class EventCategoryEnum(str, Enum):
    """Event category enum."""

    MUSIC = "MUSIC"
    CULTURE = "CULTURE"
    SPORTS = "SPORTS"
    GASTRONOMY = "GASTRONOMY"
    FESTIVAL = "FESTIVAL"
    NATURE = "NATURE"
    THEATER = "THEATER"
    WORKSHOP = "WORKSHOP"
    OTHER = "OTHER"


class PostCategoryEnum(str, Enum):
    """Post category enum."""

    EVENTS = "EVENTS"
    CULTURE = "CULTURE"
    GASTRONOMY = "GASTRONOMY"
    NATURE = "NATURE"
    TOURISM = "TOURISM"
    GENERAL = "GENERAL"
    SPORT = "SPORT"
    TIPS = "TIPS"


class EntityTypeEnum(str, Enum):
    """Entity types that can carry tags."""

    ACCOMMODATION = "ACCOMMODATION"
    DESTINATION = "DESTINATION"
    EVENT = "EVENT"
    POST = "POST"
