"""Response models for API endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SearchHit(BaseModel):
    """Individual ranked search result."""

    id: int = Field(..., description="Entry id in the index")
    title: Optional[str] = Field(None, description="Document title")
    url: str = Field(..., description="Document URL")
    date: Optional[str] = Field(None, description="Formatted document date")
    score: int = Field(..., description="Additive relevance score")


class SearchResponse(BaseModel):
    """Response for search queries."""

    query: str = Field(..., description="Original search query")
    total_results: int = Field(..., description="Number of matching documents")
    results: List[SearchHit] = Field(..., description="Ranked results, best first")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")


class IndexStatsResponse(BaseModel):
    """Summary of the loaded index."""

    total_entries: int = Field(..., description="Number of indexed documents")
    total_keys: int = Field(..., description="Number of phonetic code prefixes")
    total_postings: int = Field(..., description="Number of stored entry ids")
    max_posting_length: int = Field(..., description="Longest posting list")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""

    total_queries: int = Field(..., description="Total queries processed")
    queries_with_results: int = Field(..., description="Queries that matched at least one document")
    no_matches: int = Field(..., description="Queries that matched nothing")
    average_response_time_ms: float = Field(..., description="Average response time")
    memory_usage_mb: float = Field(..., description="Resident memory of the process in MB")
    timestamp: datetime = Field(default_factory=_utcnow, description="Metrics timestamp")
