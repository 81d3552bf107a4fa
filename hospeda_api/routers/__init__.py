"""
HTTP routers. Thin controllers over the service layer.
"""

from .public import router as public_router, health_router

__all__ = ["public_router", "health_router"]
