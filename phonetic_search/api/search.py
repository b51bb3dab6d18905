"""Search API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from ..config import Settings
from ..core.engine import SearchEngine
from ..engine_instance import get_app_settings, get_search_engine
from ..models.document import DocumentEntry
from ..models.request import SearchRequest
from ..models.response import IndexStatsResponse, SearchResponse

router = APIRouter(prefix="/api/v1", tags=["search"])


def _run_search(
    engine: SearchEngine, settings: Settings, query: str, max_results: Optional[int]
) -> SearchResponse:
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )
    return engine.search(query, max_results=max_results or settings.max_results)


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search documents",
    description="Rank documents by literal and phonetic similarity to a free-text query"
)
async def search_documents(
    q: str = Query("", description="Free-text query"),
    max_results: Optional[int] = Query(
        None,
        ge=1,
        le=1000,
        description="Maximum number of results to return"
    ),
    engine: SearchEngine = Depends(get_search_engine),
    settings: Settings = Depends(get_app_settings)
) -> SearchResponse:
    """
    Search the index with a free-text query.

    Misspelled and alternate spellings still match through their phonetic
    codes. An empty query returns no results.
    """
    return _run_search(engine, settings, q, max_results)


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search with request body",
    description="Search documents using a structured request body"
)
async def search_with_body(
    request: SearchRequest,
    engine: SearchEngine = Depends(get_search_engine),
    settings: Settings = Depends(get_app_settings)
) -> SearchResponse:
    """Search the index using a JSON request body."""
    return _run_search(engine, settings, request.query, request.max_results)


@router.get(
    "/entries/{entry_id}",
    response_model=DocumentEntry,
    response_model_exclude_none=True,
    summary="Get an indexed document",
    description="Get the title, URL and date of an indexed document by id"
)
async def get_entry(
    entry_id: int = Path(..., ge=0, description="Entry id"),
    engine: SearchEngine = Depends(get_search_engine)
) -> DocumentEntry:
    """Look up a single document entry."""
    try:
        return engine.index.entry(entry_id)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found")


@router.get(
    "/index/stats",
    response_model=IndexStatsResponse,
    summary="Index statistics",
    description="Get the number of entries, keys and postings in the loaded index"
)
async def index_stats(engine: SearchEngine = Depends(get_search_engine)) -> IndexStatsResponse:
    """Summarize the loaded index."""
    return IndexStatsResponse(**engine.index.get_stats())
