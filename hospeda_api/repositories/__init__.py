"""
Repositories - data access layer.

Structure:
    Router (thin controller)
        ↓
    Service (permissions, validation, logging)
        ↓
    Repository (data access)  ← YOU ARE HERE
        ↓
    Model (entity)
"""

from .base import BaseRepository, PageResult
from .accommodation import AccommodationRepository
from .destination import DestinationRepository
from .event import EventRepository
from .post import PostRepository
from .tag import TagRepository

__all__ = [
    "BaseRepository",
    "PageResult",
    "AccommodationRepository",
    "DestinationRepository",
    "EventRepository",
    "PostRepository",
    "TagRepository",
]
