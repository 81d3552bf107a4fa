"""
Accommodation repository: destination, type and rating finders.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hospeda_api.models import Accommodation
from hospeda_shared.config.constants import AccommodationTypeEnum

from .base import BaseRepository, PageResult


class AccommodationRepository(BaseRepository[Accommodation]):
    """Data access for accommodations."""

    def __init__(self, session: Session):
        super().__init__(Accommodation, session)

    def find_by_destination(
        self,
        destination_id: str,
        filters: dict[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> PageResult[Accommodation]:
        """Accommodations located in a destination, best rated first."""
        return self.find_all(
            {**(filters or {}), "destination_id": destination_id},
            page=page,
            page_size=page_size,
            order_by="average_rating",
            order="desc",
        )

    def find_by_type(
        self,
        accommodation_type: AccommodationTypeEnum,
        filters: dict[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> PageResult[Accommodation]:
        return self.find_all(
            {**(filters or {}), "type": accommodation_type},
            page=page,
            page_size=page_size,
            order_by="name",
        )

    def find_top_rated(
        self,
        limit: int,
        filters: dict[str, Any] | None = None,
    ) -> list[Accommodation]:
        """Highest average rating first, ties broken by review count."""
        query = self._select(filters)
        query = query.order_by(
            Accommodation.average_rating.desc(),
            Accommodation.reviews_count.desc(),
            Accommodation.id.asc(),
        ).limit(limit)
        return list(self._session.scalars(query).all())

    def find_similar(
        self,
        accommodation: Accommodation,
        limit: int,
        filters: dict[str, Any] | None = None,
    ) -> list[Accommodation]:
        """Same destination and type, excluding the accommodation itself."""
        query = self._select(
            {
                **(filters or {}),
                "destination_id": accommodation.destination_id,
                "type": accommodation.type,
            }
        )
        query = query.where(Accommodation.id != accommodation.id)
        query = query.order_by(
            Accommodation.average_rating.desc(),
            Accommodation.id.asc(),
        ).limit(limit)
        return list(self._session.scalars(query).all())

    def stats_for_destination(self, destination_id: str) -> tuple[int, float]:
        """
        Count and average rating of the live accommodations in a destination.

        Returns:
            (count, average_rating); the average is 0.0 when there are none.
        """
        query = (
            select(func.count(Accommodation.id), func.avg(Accommodation.average_rating))
            .where(Accommodation.destination_id == destination_id)
            .where(Accommodation.deleted_at.is_(None))
        )
        count, average = self._session.execute(query).one()
        return count or 0, round(float(average or 0.0), 2)
