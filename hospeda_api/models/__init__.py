"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, AuditMixin, LifecycleMixin, AdminInfoMixin
- destination: Destination
- accommodation: Accommodation
- event: Event
- post: Post
- tag: Tag, EntityTag
"""

# Base classes
from .base import Base, AdminInfoMixin, AuditMixin, LifecycleMixin, new_id, utcnow

# Places
from .destination import Destination
from .accommodation import Accommodation

# Content
from .event import Event
from .post import Post

# Tagging
from .tag import Tag, EntityTag

__all__ = [
    # Base
    "Base",
    "AdminInfoMixin",
    "AuditMixin",
    "LifecycleMixin",
    "new_id",
    "utcnow",
    # Places
    "Destination",
    "Accommodation",
    # Content
    "Event",
    "Post",
    # Tagging
    "Tag",
    "EntityTag",
]
