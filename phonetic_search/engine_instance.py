"""Access to the search engine and settings owned by the running application."""

from typing import Optional

from fastapi import HTTPException, Request

from .config import Settings, get_settings
from .core.engine import SearchEngine


def current_engine(request: Request) -> Optional[SearchEngine]:
    """Get the app's search engine, or None when no index is loaded."""
    return getattr(request.app.state, "search_engine", None)


def get_search_engine(request: Request) -> SearchEngine:
    """FastAPI dependency returning the loaded search engine."""
    engine = current_engine(request)
    if engine is None:
        raise HTTPException(status_code=503, detail="Search index is not loaded")
    return engine


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()
