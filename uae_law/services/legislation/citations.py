"""Citation and search tools wrapped with response metadata."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from ...schemas.search import SearchHit
from ...schemas.tools import FormattedCitation, ToolResponse, ValidateCitationResult
from ...utils.metadata import generate_response_metadata
from ..citation.formatter import format_citation
from ..citation.validator import validate_citation
from ..resolver.statute_id import resolve_document_id
from ..search.fts_search import get_search_service


def validate_citation_tool(db: Session | Connection, citation: str) -> ToolResponse[ValidateCitationResult]:
    return ToolResponse(
        results=validate_citation(db, citation),
        metadata=generate_response_metadata(db),
    )


def format_citation_tool(
    db: Session | Connection,
    citation: str,
    style: str = "full",
) -> ToolResponse[FormattedCitation]:
    """Format a free-text citation. Raises ValueError for an unknown style."""
    return ToolResponse(
        results=format_citation(citation, style),
        metadata=generate_response_metadata(db),
    )


def search_legislation(
    db: Session | Connection,
    query: str,
    document_id: Optional[str] = None,
    status: Optional[str] = None,
    legal_zone: Optional[str] = None,
    limit: Optional[int] = None,
) -> ToolResponse[List[SearchHit]]:
    """
    Full-text search across provisions.

    ``document_id`` accepts any reference the resolver understands; an
    unresolvable one returns no hits and a note.
    """
    resolved_id = None
    if document_id:
        resolved_id = resolve_document_id(db, document_id)
        if not resolved_id:
            return ToolResponse(
                results=[],
                metadata=generate_response_metadata(db, note=f'No document found matching "{document_id}"'),
            )

    response = get_search_service().search(
        db,
        query,
        document_id=resolved_id,
        status=status,
        legal_zone=legal_zone,
        limit=limit,
    )
    note = response.metadata.error
    return ToolResponse(results=response.results, metadata=generate_response_metadata(db, note=note))
