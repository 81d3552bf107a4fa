"""
Centralized service errors for consistent error handling.

Service code raises these inside execution callbacks and permission checks.
They never reach the HTTP layer as exceptions: the execution wrapper turns
them into a result envelope, and the routers map the envelope's code to a
status through ERROR_STATUS_MAP.

Usage:
    from hospeda_shared.utils.exceptions import NotFoundError, ForbiddenError, ValidationError

    raise NotFoundError("Accommodation", accommodation_id)
    raise ForbiddenError("Permission denied: Accommodation update")
    raise ValidationError("Accommodation is already deleted.")
"""

from enum import Enum
from typing import Any

from fastapi import status

from hospeda_shared.config.constants import INTERNAL_ERROR_MESSAGE


class ServiceErrorCode(str, Enum):
    """Closed set of failure codes a service call can return."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_STATUS_MAP: dict[ServiceErrorCode, int] = {
    ServiceErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ServiceErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ServiceErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ServiceErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ServiceErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ServiceError(Exception):
    """
    Base exception for expected service failures.

    Attributes:
        code: One of ServiceErrorCode.
        message: Human-readable message, safe to surface to clients.
        details: Optional list of field issues (validation only).
        context: Extra data for the logs, never sent to clients.
    """

    code: ServiceErrorCode = ServiceErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: ServiceErrorCode | None = None,
        details: list[dict[str, Any]] | None = None,
        **context: Any,
    ):
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message
        self.details = details
        self.context = context

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.code.value}: {self.message!r})>"


# =============================================================================
# 400 Validation Errors
# =============================================================================


class ValidationError(ServiceError):
    """
    Input validation or invalid state transition.

    Usage:
        raise ValidationError("Invalid input", details=[...])
        raise ValidationError("Post is already published.")
    """

    code = ServiceErrorCode.VALIDATION_ERROR


# =============================================================================
# 401 / 403 Permission Errors
# =============================================================================


class UnauthorizedError(ServiceError):
    """Anonymous actor attempted an action that needs an identity."""

    code = ServiceErrorCode.UNAUTHORIZED

    def __init__(self, message: str = "Authentication required", **context: Any):
        super().__init__(message, **context)


class ForbiddenError(ServiceError):
    """
    Authenticated actor lacks permission.

    Usage:
        raise ForbiddenError("Permission denied: Event hard_delete")
    """

    code = ServiceErrorCode.FORBIDDEN

    def __init__(self, message: str = "Forbidden", **context: Any):
        super().__init__(message, **context)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(ServiceError):
    """
    Entity not found, or excluded by soft delete.

    Usage:
        raise NotFoundError("Accommodation", accommodation_id)
    """

    code = ServiceErrorCode.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any | None = None, **context: Any):
        if entity_id is not None:
            message = f"{entity} with ID {entity_id} not found"
        else:
            message = f"{entity} not found"
        super().__init__(message, entity=entity, entity_id=entity_id, **context)


# =============================================================================
# 500 Internal Errors
# =============================================================================


class InternalError(ServiceError):
    """
    Unexpected failure. The message given here is only logged; clients
    always see the generic message.
    """

    code = ServiceErrorCode.INTERNAL_ERROR

    def __init__(self, reason: str = INTERNAL_ERROR_MESSAGE, **context: Any):
        super().__init__(INTERNAL_ERROR_MESSAGE, reason=reason, **context)
