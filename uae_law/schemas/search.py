"""
Search response schemas.

A single, stable response shape returned by the full-text search service.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """A single provision hit."""
    document_id: str
    document_title: str = ""
    provision_ref: str
    chapter: Optional[str] = None
    title: Optional[str] = None
    snippet: str = Field(default="", description="Content excerpt with matches marked")
    score: Optional[float] = Field(default=None, description="FTS5 bm25() rank, lower is better")
    legal_zone: Optional[str] = None
    status: Optional[str] = None

    metadata: Dict[str, Any] = Field(default_factory=dict)


class SearchMetadata(BaseModel):
    """Meta info describing the search execution and result set."""
    query: Optional[str] = None
    search_type: str = "fts5"
    fts_query: Optional[str] = None
    variant: Optional[int] = Field(default=None, description="0 = primary, 1.. = fallback variants")
    variants_tried: int = 0
    total_results: int = 0
    limit: Optional[int] = None
    duration_ms: Optional[float] = None
    error: Optional[str] = None


class SearchResponse(BaseModel):
    """Search response returned by the FTS service."""
    results: List[SearchHit]
    metadata: SearchMetadata
