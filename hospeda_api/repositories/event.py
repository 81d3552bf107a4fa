"""
Event repository: date-range and price finders.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from hospeda_api.models import Event

from .base import BaseRepository, PageResult


class EventRepository(BaseRepository[Event]):
    """Data access for events."""

    def __init__(self, session: Session):
        super().__init__(Event, session)

    def find_upcoming(
        self,
        from_date: datetime,
        to_date: datetime,
        filters: dict[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> PageResult[Event]:
        """Events starting within [from_date, to_date], soonest first."""
        query = self._select(filters)
        query = query.where(Event.start_date >= from_date).where(Event.start_date <= to_date)
        return self._paginate(
            query, page=page, page_size=page_size, order_by="start_date"
        )

    def find_free(
        self,
        filters: dict[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> PageResult[Event]:
        """Events without a price."""
        return self.find_all(
            {**(filters or {}), "price": None},
            page=page,
            page_size=page_size,
            order_by="start_date",
        )
