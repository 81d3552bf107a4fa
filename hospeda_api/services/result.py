"""
Service result envelope.

Every public service method returns a ServiceOutput holding exactly one of
``data`` or ``error``. Callers branch on ``output.error.code`` instead of
catching exceptions.

Usage:
    output = service.get_by_id(actor, accommodation_id)
    if output.error is not None:
        if output.error.code == ServiceErrorCode.NOT_FOUND:
            ...
    else:
        accommodation = output.data
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic_core import to_jsonable_python

from hospeda_shared.config.constants import INTERNAL_ERROR_MESSAGE
from hospeda_shared.utils.exceptions import ServiceError, ServiceErrorCode

TData = TypeVar("TData")


@dataclass(frozen=True)
class ErrorDetail:
    """Failure half of the envelope."""

    code: ServiceErrorCode
    message: str
    details: list[dict[str, Any]] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class ServiceOutput(Generic[TData]):
    """
    Discriminated outcome of a service call.

    Building an envelope with both or neither of data/error is a
    programming error and raises ValueError immediately.
    """

    data: TData | None = None
    error: ErrorDetail | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError("ServiceOutput requires exactly one of data or error")

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def success(cls, data: TData) -> "ServiceOutput[TData]":
        return cls(data=data)

    @classmethod
    def failure(
        cls,
        code: ServiceErrorCode,
        message: str,
        details: list[dict[str, Any]] | None = None,
    ) -> "ServiceOutput[TData]":
        if code == ServiceErrorCode.INTERNAL_ERROR:
            # Internal causes are logged, never surfaced
            message = INTERNAL_ERROR_MESSAGE
            details = None
        return cls(error=ErrorDetail(code=code, message=message, details=details))

    @classmethod
    def from_error(cls, error: ServiceError) -> "ServiceOutput[TData]":
        return cls.failure(error.code, error.message, error.details)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form: {"data": ...} or {"error": {...}}."""
        if self.error is not None:
            return {"error": self.error.to_dict()}
        return {"data": to_jsonable_python(self.data)}
