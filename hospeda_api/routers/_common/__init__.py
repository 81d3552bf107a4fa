"""
Common utilities shared across routers.
"""

from .dependencies import get_actor, get_service_context
from .responses import to_response, error_response

__all__ = [
    "get_actor",
    "get_service_context",
    "to_response",
    "error_response",
]
