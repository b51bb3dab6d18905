"""Health check and monitoring API endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..engine_instance import current_engine, get_app_settings
from ..models.response import HealthResponse

router = APIRouter(prefix="/api/v1", tags=["health"])

# Track application start time
app_start_time = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the search service"
)
async def health_check(request: Request) -> HealthResponse:
    """
    Perform a health check on the search service.

    The service is degraded when no index is loaded and unhealthy when
    the loaded index cannot answer a query.
    """
    engine = current_engine(request)
    dependencies = {"search_index": "healthy", "search_engine": "healthy"}

    if engine is None:
        dependencies["search_index"] = "missing"
        dependencies["search_engine"] = "degraded"
    else:
        try:
            engine.matcher.match("test", engine.index)
        except Exception:
            dependencies["search_engine"] = "unhealthy"

    if all(status == "healthy" for status in dependencies.values()):
        status = "healthy"
    elif any(status == "unhealthy" for status in dependencies.values()):
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=get_app_settings(request).app_version,
        uptime=time.time() - app_start_time,
        dependencies=dependencies
    )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service is ready to accept requests"
)
async def readiness_check(request: Request) -> JSONResponse:
    """Ready once an index has been loaded."""
    engine = current_engine(request)
    if engine is None:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": "Search index is not loaded", "timestamp": _now()}
        )

    return JSONResponse(
        status_code=200,
        content={"status": "ready", "timestamp": _now(), "index_stats": engine.index.get_stats()}
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Simple liveness check."""
    return JSONResponse(
        status_code=200,
        content={"status": "alive", "timestamp": _now(), "uptime": time.time() - app_start_time}
    )
