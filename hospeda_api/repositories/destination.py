"""
Destination repository.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from hospeda_api.models import Destination

from hospeda_shared.infrastructure.db import safe_commit

from .base import BaseRepository


class DestinationRepository(BaseRepository[Destination]):
    """Data access for destinations."""

    def __init__(self, session: Session):
        super().__init__(Destination, session)

    def set_accommodations_count(self, destination: Destination, count: int) -> Destination:
        """Store the denormalized accommodation counter."""
        destination.accommodations_count = count
        safe_commit(self._session)
        return destination
