"""
Public API routers, mounted under /api/v1/public.
"""

from fastapi import APIRouter

from .accommodations import router as accommodations_router
from .destinations import router as destinations_router
from .events import router as events_router
from .posts import router as posts_router
from .tags import router as tags_router
from .health import router as health_router

router = APIRouter(prefix="/api/v1/public")
router.include_router(accommodations_router)
router.include_router(destinations_router)
router.include_router(events_router)
router.include_router(posts_router)
router.include_router(tags_router)

__all__ = [
    "router",
    "health_router",
]
