"""
Centralized structured logging for the backend.
Uses Python's standard logging with JSON formatting for production.

Includes request correlation IDs and a dedicated permission audit trail.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from hospeda_shared.config.constants import REDACTED, SENSITIVE_LOG_KEYS
from hospeda_shared.config.settings import settings


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    Outputs logs in a format easily parseable by log aggregation tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id and request_id != "-":
            log_data["request_id"] = request_id

        # Add extra fields if present
        if hasattr(record, "extra_data") and record.extra_data:
            log_data["data"] = record.extra_data

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add source location in debug mode
        if settings.debug:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable formatter for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now().strftime("%H:%M:%S")

        request_id = getattr(record, "request_id", None)
        if request_id and request_id != "-":
            request_id_str = f"{self.DIM}[{request_id[:8]}]{self.RESET} "
        else:
            request_id_str = ""

        # Base message
        message = f"{color}[{timestamp}] {record.levelname:8}{self.RESET} {request_id_str}{record.name}: {record.getMessage()}"

        # Add extra data if present
        if hasattr(record, "extra_data") and record.extra_data:
            data_str = " | ".join(f"{k}={v}" for k, v in record.extra_data.items())
            message += f" ({data_str})"

        # Add exception info if present
        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


class StructuredLogger(logging.Logger):
    """
    Custom logger that supports structured data.

    Keyword arguments passed to the level methods are attached to the
    record as ``extra_data``.
    """

    def _log_with_data(
        self,
        level: int,
        msg: str,
        args: tuple,
        exc_info: Any = None,
        extra: dict | None = None,
        **kwargs: Any,
    ) -> None:
        """Log with optional structured data."""
        if not self.isEnabledFor(level):
            return
        if extra is None:
            extra = {}
        extra["extra_data"] = kwargs if kwargs else None
        super()._log(level, msg, args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.DEBUG, msg, args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.INFO, msg, args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.WARNING, msg, args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        exc_info = kwargs.pop("exc_info", None)
        self._log_with_data(logging.ERROR, msg, args, exc_info=exc_info, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        exc_info = kwargs.pop("exc_info", None)
        self._log_with_data(logging.CRITICAL, msg, args, exc_info=exc_info, **kwargs)


# Set custom logger class
logging.setLoggerClass(StructuredLogger)


def setup_logging() -> None:
    """
    Configure logging for the application.
    Call this once at application startup.
    """
    # Import here to avoid circular imports
    from hospeda_shared.infrastructure.correlation import CorrelationIdFilter

    # Determine log level from settings
    if settings.log_level:
        log_level = logging.getLevelName(settings.log_level.upper())
    else:
        log_level = logging.DEBUG if settings.debug else logging.INFO

    # Create handler with correlation filter
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.addFilter(CorrelationIdFilter())

    # Use appropriate formatter based on environment
    if settings.environment == "production":
        formatter = StructuredFormatter()
    else:
        formatter = DevelopmentFormatter()

    handler.setFormatter(formatter)

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a logger instance with the given name.

    Usage:
        from hospeda_shared.config.logging import get_logger
        logger = get_logger(__name__)

        logger.info("Accommodation created", accommodation_id=id, email=mask_email(email))
        logger.error("Failed to publish post", post_id=post_id, exc_info=True)
    """
    return logging.getLogger(name)  # type: ignore


def mask_email(email: str | None) -> str:
    """
    Mask email address for logging to protect PII.

    Converts "user@example.com" to "us***@example.com"
    Only shows first 2 characters of local part and full domain for debugging.

    Args:
        email: The email address to mask.

    Returns:
        Masked email string safe for logging.
    """
    if not email:
        return "<no-email>"

    try:
        local, domain = email.split("@", 1)
        if len(local) <= 2:
            masked_local = local[0] + "***"
        else:
            masked_local = local[:2] + "***"
        return f"{masked_local}@{domain}"
    except (ValueError, IndexError):
        # Not a valid email format
        return "***@invalid"


def mask_user_id(user_id: int | str | None) -> str:
    """
    Mask user ID for logging in sensitive contexts.

    Shows the first characters only, enough to correlate entries
    within a request without exposing the full identifier.

    Args:
        user_id: The user ID to mask.

    Returns:
        Masked user ID string safe for logging.
    """
    if user_id is None or user_id == "":
        return "<anonymous>"

    user_str = str(user_id)
    if len(user_str) <= 2:
        return user_str[0] + "***"
    if len(user_str) <= 8:
        return f"{user_str[:2]}***"
    return f"{user_str[:8]}***"


def redact(value: Any, key: str | None = None) -> Any:
    """
    Build a log-safe copy of a service input.

    Sensitive keys are replaced with ``***``, email fields are masked,
    pydantic models are dumped first. Unknown objects pass through as-is
    and are stringified by the formatter.
    """
    if key is not None:
        lowered = key.lower()
        if any(sensitive in lowered for sensitive in SENSITIVE_LOG_KEYS):
            return REDACTED
        if "email" in lowered and isinstance(value, str):
            return mask_email(value)

    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")

    if isinstance(value, dict):
        return {k: redact(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [redact(item) for item in value]
    return value


# Pre-configured loggers for common modules
api_logger = get_logger("hospeda_api")

# Dedicated security audit logger
security_audit_logger = get_logger("security.audit")


# =============================================================================
# Security Audit Logging Functions
# =============================================================================


def audit_permission_event(
    event_type: str,
    permission: str | None = None,
    action: str | None = None,
    entity: str | None = None,
    entity_id: str | None = None,
    actor_id: str | None = None,
    role: str | None = None,
    reason: str | None = None,
    **extra: Any,
) -> None:
    """
    Log a denied service operation to the permission audit trail.

    Kept apart from the generic error log so that denials can be queried
    on their own.

    Args:
        event_type: Outcome code (FORBIDDEN, UNAUTHORIZED)
        permission: Permission token that was required, if any
        action: Service action being attempted (create, view, ...)
        entity: Entity name the action targeted
        entity_id: Target entity ID (None for create/list)
        actor_id: Actor ID (masked automatically)
        role: Actor role
        reason: Human-readable denial reason
        **extra: Additional context data
    """
    security_audit_logger.warning(
        f"PERMISSION_AUDIT: {event_type}",
        event_type=event_type,
        permission=permission,
        action=action,
        entity=entity,
        entity_id=entity_id,
        actor_id=mask_user_id(actor_id),
        role=role,
        reason=reason,
        **extra,
    )
