"""
Utilities module: Exceptions, validators.
"""

from hospeda_shared.utils.exceptions import (
    ServiceErrorCode,
    ServiceError,
    NotFoundError,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
    InternalError,
    ERROR_STATUS_MAP,
)
from hospeda_shared.utils.validators import (
    escape_like_pattern,
    slugify,
)

__all__ = [
    # exceptions
    "ServiceErrorCode",
    "ServiceError",
    "NotFoundError",
    "ForbiddenError",
    "UnauthorizedError",
    "ValidationError",
    "InternalError",
    "ERROR_STATUS_MAP",
    # validators
    "escape_like_pattern",
    "slugify",
]
