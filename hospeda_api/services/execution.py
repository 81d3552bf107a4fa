"""
Logged, validated execution wrapper.

Every public service method funnels through run_with_logging_and_validation,
which gives each entity service the same observability and the same error
envelope:

    1. log "<Entity>.<method>:start" with redacted input and actor
    2. validate input against the schema (VALIDATION_ERROR, execute not called)
    3. run execute(validated, actor); permission hooks run inside it
    4. ServiceError -> its own code; any other exception -> INTERNAL_ERROR
    5. log "<Entity>.<method>:end" (or ":error") and return the envelope

Nothing raised inside execute escapes the wrapper.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from hospeda_shared.config.constants import INVALID_INPUT_MESSAGE
from hospeda_shared.config.logging import mask_user_id, redact
from hospeda_shared.utils.exceptions import (
    InternalError,
    ServiceError,
    ServiceErrorCode,
    ValidationError,
)

from .context import PermissionAuditRecord, ServiceContext
from .permissions.actor import Actor
from .result import ServiceOutput
from .validation import translate_validation_error

TResult = TypeVar("TResult")

PERMISSION_CODES = frozenset({ServiceErrorCode.FORBIDDEN, ServiceErrorCode.UNAUTHORIZED})


def actor_summary(actor: Actor | None) -> dict[str, Any] | None:
    """Log-safe view of the actor."""
    if actor is None:
        return None
    return {
        "id": mask_user_id(actor.id),
        "role": actor.role.value,
        "state": actor.state.value,
    }


def result_summary(result: Any) -> Any:
    """Short description of a result for the end log line."""
    if isinstance(result, BaseModel):
        if "items" in type(result).model_fields and "total" in type(result).model_fields:
            return {"items": len(result.items), "total": result.total}
        if "id" in type(result).model_fields:
            return {"id": result.id}
        return redact(result)
    if isinstance(result, list):
        return {"items": len(result)}
    if isinstance(result, dict):
        return {key: result_summary(value) for key, value in result.items()}
    return result


def _rollback(ctx: ServiceContext, label: str) -> None:
    """Leave the session usable after a failed write."""
    try:
        ctx.db.rollback()
    except SQLAlchemyError as err:
        ctx.logger.error(err, f"{label}:rollback_failed")


def run_with_logging_and_validation(
    ctx: ServiceContext,
    *,
    method_name: str,
    input: Any,
    schema: type[BaseModel] | None,
    actor: Actor,
    execute: Callable[[Any, Actor], TResult],
    entity_name: str = "",
) -> ServiceOutput[TResult]:
    """
    Run one service operation inside the logging/validation/error envelope.

    Args:
        ctx: Service context (db + logger).
        method_name: Public method name, used in log labels.
        input: Raw input; validated against schema.
        schema: Pydantic model to validate with, or None to skip validation.
        actor: Caller identity.
        execute: Callback receiving (validated_input, actor).
        entity_name: Entity label prefix for log lines.

    Returns:
        ServiceOutput with data on success, error otherwise.
    """
    label = f"{entity_name}.{method_name}" if entity_name else method_name
    ctx.logger.info(
        {"input": redact(input), "actor": actor_summary(actor)},
        f"{label}:start",
    )

    validated = input
    if schema is not None:
        try:
            validated = schema.model_validate(input)
        except PydanticValidationError as exc:
            err = ValidationError(
                INVALID_INPUT_MESSAGE,
                details=translate_validation_error(exc),
            )
            ctx.logger.error(err, f"{label}:error")
            return ServiceOutput.from_error(err)

    try:
        result = execute(validated, actor)
        if result is None:
            raise InternalError(f"{label} returned no data")
    except ServiceError as err:
        if err.code in PERMISSION_CODES:
            ctx.logger.permission(PermissionAuditRecord.from_error(err, actor))
        if err.code == ServiceErrorCode.INTERNAL_ERROR:
            _rollback(ctx, label)
        ctx.logger.error(err, f"{label}:error")
        return ServiceOutput.from_error(err)
    except Exception as err:
        _rollback(ctx, label)
        ctx.logger.error(err, f"{label}:error")
        return ServiceOutput.failure(ServiceErrorCode.INTERNAL_ERROR, str(err))

    ctx.logger.info({"result": result_summary(result)}, f"{label}:end")
    return ServiceOutput.success(result)
