"""
Base class and mixins for all SQLAlchemy ORM models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, DateTime, Enum as SAEnum, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from hospeda_shared.config.constants import LifecycleStatusEnum


def new_id() -> str:
    """Generate a primary key value."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_type(enum_cls: type[Enum]) -> SAEnum:
    """Portable enum column type, stored as VARCHAR on every backend."""
    return SAEnum(enum_cls, native_enum=False, length=32, validate_strings=True)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AuditMixin:
    """
    Mixin providing soft delete and audit trail fields for all models.

    Fields added:
    - created_at, updated_at, deleted_at: Audit timestamps
    - created_by_id, updated_by_id, deleted_by_id: Actor tracking

    A record is soft-deleted when deleted_at is set. The row stays in the
    table until a hard delete.

    Methods:
    - soft_delete(user_id): Mark entity as deleted
    - restore(user_id): Restore a soft-deleted entity
    """

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    # Actor tracking
    # Note: no FK, actors live in the identity provider, not in this database
    created_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    updated_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    deleted_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self, user_id: str | None) -> None:
        """
        Perform soft delete with audit trail.
        ACTIVE entities move to ARCHIVED; drafts stay drafts.
        """
        self.deleted_at = utcnow()
        self.deleted_by_id = user_id
        if getattr(self, "lifecycle_state", None) == LifecycleStatusEnum.ACTIVE:
            self.lifecycle_state = LifecycleStatusEnum.ARCHIVED

    def restore(self, user_id: str | None) -> None:
        """
        Restore a soft-deleted record.
        ARCHIVED entities go back to ACTIVE; drafts stay drafts.
        """
        self.deleted_at = None
        self.deleted_by_id = None
        if getattr(self, "lifecycle_state", None) == LifecycleStatusEnum.ARCHIVED:
            self.lifecycle_state = LifecycleStatusEnum.ACTIVE
        self.set_updated_by(user_id)

    def set_created_by(self, user_id: str | None) -> None:
        """Set created_by and updated_by fields on new entity."""
        self.created_by_id = user_id
        self.updated_by_id = user_id

    def set_updated_by(self, user_id: str | None) -> None:
        """Set updated_by fields on entity update."""
        self.updated_by_id = user_id
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        state = "deleted" if self.is_deleted else "active"
        return f"<{class_name}(id={id_val}, {state})>"


class AdminInfoMixin:
    """Staff-only notes and flags, never part of the public output."""

    admin_info: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)


class LifecycleMixin:
    """
    Mixin adding the coarse lifecycle field (DRAFT / ACTIVE / ARCHIVED).

    ACTIVE and ARCHIVED follow soft delete and restore; DRAFT -> ACTIVE is
    the publish transition owned by the services.
    """

    lifecycle_state: Mapped[LifecycleStatusEnum] = mapped_column(
        enum_type(LifecycleStatusEnum),
        default=LifecycleStatusEnum.ACTIVE,
        nullable=False,
        index=True,
    )
