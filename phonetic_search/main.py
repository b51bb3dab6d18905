"""FastAPI application serving phonetic search queries."""

import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import health_router, metrics_router, search_router
from .build import build_site_index
from .config import Settings, configure_logging, get_settings
from .core.engine import SearchEngine
from .core.index import SearchIndex
from .models.response import ErrorResponse

logger = structlog.get_logger(__name__)


def load_index(settings: Settings) -> Optional[SearchIndex]:
    """
    Load the configured index artifact, or build one from ``source_dir``.

    Returns None when neither is configured.
    """
    if settings.index_path and Path(settings.index_path).exists():
        index = SearchIndex.load(settings.index_path)
        logger.info("index_loaded", path=settings.index_path, **index.get_stats())
        return index

    if settings.source_dir:
        return build_site_index(settings, write=False)

    logger.warning("no_index_configured", index_path=settings.index_path)
    return None


def create_app(settings: Optional[Settings] = None, index: Optional[SearchIndex] = None) -> FastAPI:
    """
    Create the application.

    Args:
        settings: Settings to use (defaults to the environment)
        index: Prebuilt index; when omitted it is loaded at startup
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info("Starting phonetic search service", version=settings.app_version)

        if app.state.search_engine is None:
            try:
                loaded = load_index(settings)
            except Exception as e:
                logger.error("Failed to load search index", error=str(e))
                raise
            if loaded is not None:
                app.state.search_engine = SearchEngine(loaded)

        yield

        logger.info("Shutting down phonetic search service")

    app = FastAPI(
        title=settings.app_name,
        description="Phonetic fuzzy full-text search over a prebuilt index",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.search_engine = SearchEngine(index) if index is not None else None

    # Add middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def log_requests(request: Request, call_next) -> Response:
        """Log all HTTP requests."""
        start_time = time.time()
        response = await call_next(request)
        logger.info(
            "Request completed",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            process_time_ms=round((time.time() - start_time) * 1000, 2)
        )
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "Unhandled exception",
            method=request.method,
            url=str(request.url),
            error=str(exc),
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                message="An unexpected error occurred",
                details={"exception": str(exc)} if settings.debug else None
            ).model_dump(mode="json")
        )

    app.include_router(search_router)
    app.include_router(health_router)
    app.include_router(metrics_router)

    @app.get("/", summary="Root endpoint", description="Get basic information about the API")
    async def root() -> dict:
        """Root endpoint with basic API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": "Phonetic fuzzy full-text search over a prebuilt index",
            "docs_url": "/docs",
            "search_url": "/api/v1/search?q=",
            "health_url": "/api/v1/health",
            "status": "running"
        }

    return app


settings = get_settings()
configure_logging(settings.log_level, settings.log_format)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "phonetic_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
