"""Metrics and monitoring API endpoints."""

import os

import psutil
from fastapi import APIRouter, Depends

from ..core.engine import SearchEngine
from ..engine_instance import get_search_engine
from ..models.response import MetricsResponse

router = APIRouter(prefix="/api/v1", tags=["metrics"])


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get query statistics and memory usage of the search service"
)
async def get_metrics(engine: SearchEngine = Depends(get_search_engine)) -> MetricsResponse:
    """Report query counters, average latency and process memory."""
    stats = engine.get_stats()
    memory_usage_mb = psutil.Process(os.getpid()).memory_info().rss / (1024 * 1024)

    return MetricsResponse(
        total_queries=stats["total_queries"],
        queries_with_results=stats["queries_with_results"],
        no_matches=stats["no_matches"],
        average_response_time_ms=stats["average_execution_time_ms"],
        memory_usage_mb=memory_usage_mb
    )
