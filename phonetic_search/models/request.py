"""Request models for API endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SearchRequest(BaseModel):
    """Request model for search queries."""

    query: str = Field(..., max_length=1000, description="Free-text search query")
    max_results: Optional[int] = Field(
        None, ge=1, le=1000, description="Maximum number of results to return"
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Strip surrounding whitespace; an empty query is allowed and matches nothing."""
        return v.strip()
