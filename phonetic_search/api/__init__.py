"""API endpoints for phonetic search."""

from .search import router as search_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "search_router",
    "health_router",
    "metrics_router",
]
