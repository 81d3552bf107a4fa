"""
Repository Pattern for database access.

Provides the model layer consumed by the services: typed filters in,
records or pages out. Services never touch the session directly.

Usage:
    from hospeda_api.repositories import BaseRepository

    repo = BaseRepository(Destination, db)

    page = repo.find_all({"country": "AR"}, page=1, page_size=10, order_by="name")
    page.items, page.total

    destination = repo.find_by_id(destination_id)
    repo.soft_delete(destination, user_id=actor.id)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Mapping, Sequence, TypeVar

from sqlalchemy import func, or_, select, exists as sql_exists
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from hospeda_api.models import Base
from hospeda_shared.infrastructure.db import safe_commit
from hospeda_shared.utils.validators import escape_like_pattern

ModelT = TypeVar("ModelT", bound=Base)


@dataclass
class PageResult(Generic[ModelT]):
    """A page of entities plus the total number of matches before paging."""

    items: list[ModelT] = field(default_factory=list)
    total: int = 0


class BaseRepository(Generic[ModelT]):
    """
    Base repository providing common database operations.

    Soft-deleted rows (deleted_at set) are excluded from every read unless
    include_deleted=True is passed.
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    # =========================================================================
    # Query Building
    # =========================================================================

    def has_column(self, name: str) -> bool:
        """Check whether the model maps a column with this name."""
        return name in self._model.__table__.columns

    def _column(self, name: str) -> Any:
        if not self.has_column(name):
            raise ValueError(f"Unknown field '{name}' for {self._model.__name__}")
        return getattr(self._model, name)

    def _base_query(self) -> Select:
        """Create base select query."""
        return select(self._model)

    def _apply_deleted_filter(self, query: Select, include_deleted: bool) -> Select:
        """Hide soft-deleted rows if model supports soft delete."""
        if hasattr(self._model, "deleted_at") and not include_deleted:
            query = query.where(self._model.deleted_at.is_(None))
        return query

    def _apply_filters(self, query: Select, filters: Mapping[str, Any] | None) -> Select:
        """
        Apply equality filters.

        None matches NULL, a list/tuple/set matches any of its values.
        """
        for name, value in (filters or {}).items():
            column = self._column(name)
            if value is None:
                query = query.where(column.is_(None))
            elif isinstance(value, (list, tuple, set, frozenset)):
                query = query.where(column.in_(list(value)))
            else:
                query = query.where(column == value)
        return query

    def _apply_search(self, query: Select, q: str | None, fields: Iterable[str]) -> Select:
        """Case-insensitive substring match of q against any of the fields."""
        fields = list(fields)
        if not q or not fields:
            return query
        pattern = f"%{escape_like_pattern(q.lower())}%"
        clauses = [
            func.lower(self._column(name)).like(pattern, escape="\\")
            for name in fields
        ]
        return query.where(or_(*clauses))

    def _apply_ordering(self, query: Select, order_by: str | None, order: str) -> Select:
        """Order by the given column, with the primary key as tie-breaker."""
        if order_by:
            column = self._column(order_by)
            query = query.order_by(column.desc() if order == "desc" else column.asc())
        elif hasattr(self._model, "created_at"):
            query = query.order_by(self._model.created_at.asc())
        return query.order_by(self._model.id.asc())

    def _select(
        self,
        filters: Mapping[str, Any] | None = None,
        *,
        include_deleted: bool = False,
    ) -> Select:
        query = self._base_query()
        query = self._apply_deleted_filter(query, include_deleted)
        return self._apply_filters(query, filters)

    def _count_query(self, query: Select) -> int:
        subquery = query.order_by(None).subquery()
        return self._session.scalar(select(func.count()).select_from(subquery)) or 0

    def _paginate(
        self,
        query: Select,
        *,
        page: int | None = None,
        page_size: int | None = None,
        order_by: str | None = None,
        order: str = "asc",
    ) -> PageResult[ModelT]:
        """
        Count the full result, then fetch one page of it.

        Offset is (page - 1) * page_size. Without page_size every row is returned.
        """
        total = self._count_query(query)
        query = self._apply_ordering(query, order_by, order)
        if page_size is not None:
            query = query.offset((max(page or 1, 1) - 1) * page_size).limit(page_size)
        items = list(self._session.scalars(query).all())
        return PageResult(items=items, total=total)

    # =========================================================================
    # Reads
    # =========================================================================

    def find_by_id(
        self,
        entity_id: str,
        *,
        include_deleted: bool = False,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Args:
            entity_id: The primary key value.
            include_deleted: Include soft-deleted entities.

        Returns:
            Entity or None if not found.
        """
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_deleted_filter(query, include_deleted)
        return self._session.scalar(query)

    def find_one(
        self,
        filters: Mapping[str, Any],
        *,
        include_deleted: bool = False,
    ) -> ModelT | None:
        """Find the first entity matching all filters."""
        query = self._select(filters, include_deleted=include_deleted).limit(1)
        return self._session.scalar(query)

    def find_all(
        self,
        filters: Mapping[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
        order_by: str | None = None,
        order: str = "asc",
        include_deleted: bool = False,
    ) -> PageResult[ModelT]:
        """
        Find entities matching equality filters.

        Args:
            filters: Column name -> value.
            page: 1-based page number.
            page_size: Page size; None returns every match.
            order_by: Column name to order by.
            order: "asc" or "desc".
            include_deleted: Include soft-deleted entities.

        Returns:
            PageResult with the page items and the unpaged total.
        """
        query = self._select(filters, include_deleted=include_deleted)
        return self._paginate(
            query, page=page, page_size=page_size, order_by=order_by, order=order
        )

    def search(
        self,
        q: str | None,
        fields: Sequence[str],
        filters: Mapping[str, Any] | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
        order_by: str | None = None,
        order: str = "asc",
        include_deleted: bool = False,
    ) -> PageResult[ModelT]:
        """Like find_all, plus a case-insensitive free-text match on fields."""
        query = self._select(filters, include_deleted=include_deleted)
        query = self._apply_search(query, q, fields)
        return self._paginate(
            query, page=page, page_size=page_size, order_by=order_by, order=order
        )

    def count(
        self,
        filters: Mapping[str, Any] | None = None,
        *,
        q: str | None = None,
        fields: Sequence[str] = (),
        include_deleted: bool = False,
    ) -> int:
        """Count entities matching filters and optional free text."""
        query = self._select(filters, include_deleted=include_deleted)
        query = self._apply_search(query, q, fields)
        return self._count_query(query)

    def exists_by(self, name: str, value: Any, *, exclude_id: str | None = None) -> bool:
        """Check if any row, deleted or not, has column == value."""
        condition = self._column(name) == value
        if exclude_id is not None:
            condition = condition & (self._model.id != exclude_id)
        return self._session.scalar(select(sql_exists().where(condition))) or False

    # =========================================================================
    # Writes
    # =========================================================================

    def create(self, values: Mapping[str, Any], *, user_id: str | None = None) -> ModelT:
        """Insert a new entity, stamping created_by/updated_by when supported."""
        entity = self._model(**values)
        if hasattr(entity, "set_created_by"):
            entity.set_created_by(user_id)
        self._session.add(entity)
        safe_commit(self._session)
        self._session.refresh(entity)
        return entity

    def update(
        self,
        entity: ModelT,
        values: Mapping[str, Any],
        *,
        user_id: str | None = None,
    ) -> ModelT:
        """Apply values to entity, stamping updated_by/updated_at when supported."""
        for name, value in values.items():
            self._column(name)
            setattr(entity, name, value)
        if hasattr(entity, "set_updated_by"):
            entity.set_updated_by(user_id)
        safe_commit(self._session)
        self._session.refresh(entity)
        return entity

    def soft_delete(self, entity: ModelT, *, user_id: str | None = None) -> int:
        """Mark entity deleted. Returns the number of affected rows."""
        entity.soft_delete(user_id)
        safe_commit(self._session)
        return 1

    def restore(self, entity: ModelT, *, user_id: str | None = None) -> int:
        """Clear the deletion marks. Returns the number of affected rows."""
        entity.restore(user_id)
        safe_commit(self._session)
        return 1

    def hard_delete(self, entity: ModelT) -> int:
        """Permanently remove entity. Returns the number of affected rows."""
        self._session.delete(entity)
        safe_commit(self._session)
        return 1
