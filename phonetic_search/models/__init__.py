"""Data models for phonetic search."""

from .document import Document, DocumentEntry
from .response import (
    SearchHit,
    SearchResponse,
    IndexStatsResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import SearchRequest

__all__ = [
    "Document",
    "DocumentEntry",
    "SearchHit",
    "SearchResponse",
    "IndexStatsResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "SearchRequest",
]
