"""
Service context: the dependencies every service receives at construction.

Services never reach for a module-level session or logger; tests build a
ServiceContext with an in-memory session and a fake or mocked logger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from sqlalchemy.orm import Session

from hospeda_shared.config.logging import (
    StructuredLogger,
    audit_permission_event,
    get_logger,
)
from hospeda_shared.utils.exceptions import ServiceError, ServiceErrorCode

from .permissions.actor import Actor


@dataclass(frozen=True)
class PermissionAuditRecord:
    """One denied operation, as written to the audit trail."""

    code: str
    action: str | None = None
    permission: str | None = None
    entity: str | None = None
    entity_id: str | None = None
    actor_id: str | None = None
    role: str | None = None
    reason: str | None = None
    message: str | None = None

    @classmethod
    def from_error(cls, error: ServiceError, actor: Actor | None) -> "PermissionAuditRecord":
        context = error.context
        return cls(
            code=error.code.value,
            action=context.get("action"),
            permission=context.get("permission"),
            entity=context.get("entity"),
            entity_id=context.get("entity_id"),
            actor_id=actor.id if actor is not None else None,
            role=actor.role.value if actor is not None else None,
            reason=context.get("reason"),
            message=error.message,
        )


class ServiceLogger:
    """
    Logger interface consumed by the execution wrapper.

    - info(context, label): structured start/end entries
    - error(err, label): failures; expected service errors without traceback
    - permission(record): denial audit, written to the security audit logger
    """

    def __init__(self, name: str = "hospeda_api.services"):
        self._logger: StructuredLogger = get_logger(name)

    @property
    def logger(self) -> StructuredLogger:
        return self._logger

    def info(self, context: Mapping[str, Any], label: str) -> None:
        self._logger.info(label, **dict(context))

    def error(self, err: BaseException, label: str, **context: Any) -> None:
        if isinstance(err, ServiceError) and err.code != ServiceErrorCode.INTERNAL_ERROR:
            self._logger.warning(
                label,
                code=err.code.value,
                error=err.message,
                details=err.details,
                **context,
            )
            return
        self._logger.error(
            label,
            error=str(err),
            error_type=type(err).__name__,
            exc_info=err,
            **context,
        )

    def permission(self, record: PermissionAuditRecord) -> None:
        audit_permission_event(
            record.code,
            permission=record.permission,
            action=record.action,
            entity=record.entity,
            entity_id=record.entity_id,
            actor_id=record.actor_id,
            role=record.role,
            reason=record.reason,
        )


@dataclass
class ServiceContext:
    """Per-request dependencies: database session and service logger."""

    db: Session
    logger: ServiceLogger = field(default_factory=ServiceLogger)

    @classmethod
    def from_session(cls, db: Session, logger_name: str = "hospeda_api.services") -> "ServiceContext":
        return cls(db=db, logger=ServiceLogger(logger_name))
