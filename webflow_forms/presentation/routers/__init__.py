"""API routers package."""
from .guestbook_router import router as guestbook_router
from .timeline_router import router as timeline_router
from .memory_router import router as memory_router
from .image_router import router as image_router
from .cms_router import router as cms_router

__all__ = [
    "guestbook_router",
    "timeline_router",
    "memory_router",
    "image_router",
    "cms_router",
]
