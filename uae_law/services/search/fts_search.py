"""
Full-text search over provisions using SQLite FTS5.

The primary query variant runs first; fallback variants run one by one only
while nothing has been found. Ranking is FTS5's bm25() as-is.
"""

from __future__ import annotations

import time
from typing import List, Optional

from sqlalchemy.engine import Connection
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from ...config.settings import settings
from ...db import queries
from ...schemas.search import SearchHit, SearchMetadata, SearchResponse
from ...utils.logging import get_logger, log_error, log_timing
from .query_builder import build_search_variants

logger = get_logger(__name__)


class FTSSearchService:
    """Keyword search over the provisions_fts index."""

    def __init__(self, max_limit: Optional[int] = None):
        self.max_limit = max_limit or settings.search_max_limit

    def clamp_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            limit = settings.search_default_limit
        return max(1, min(int(limit), self.max_limit))

    def search(
        self,
        db: Session | Connection,
        query: str,
        document_id: Optional[str] = None,
        status: Optional[str] = None,
        legal_zone: Optional[str] = None,
        limit: Optional[int] = 10,
    ) -> SearchResponse:
        """
        Search provisions.

        Args:
            db: Session or Connection
            query: Raw user query
            document_id: Restrict to one (already resolved) document
            status: Restrict to a document status, e.g. 'in_force'
            legal_zone: Restrict to 'federal', 'difc' or 'adgm'
            limit: Maximum hits, clamped to [1, search_max_limit]

        Returns:
            SearchResponse; the metadata names the variant that produced the hits
        """
        start_time = time.time()
        limit = self.clamp_limit(limit)
        variants = build_search_variants(query)
        metadata = SearchMetadata(query=query, limit=limit)

        if not variants.primary:
            logger.warning(f"No valid terms for FTS query: '{query}'")
            metadata.error = "No valid terms for FTS query"
            return SearchResponse(results=[], metadata=metadata)

        hits: List[SearchHit] = []
        for index, fts_query in enumerate(variants.all):
            metadata.variants_tried = index + 1
            metadata.fts_query = fts_query
            metadata.variant = index
            hits = self._run(db, fts_query, document_id, status, legal_zone, limit)
            if hits:
                break

        duration_ms = (time.time() - start_time) * 1000
        metadata.total_results = len(hits)
        metadata.duration_ms = round(duration_ms, 2)

        logger.info(
            f"FTS search '{query}' -> {len(hits)} results (variant {metadata.variant})",
            extra=log_timing("fts_search", duration_ms, results_count=len(hits)),
        )
        return SearchResponse(results=hits, metadata=metadata)

    def _run(
        self,
        db: Session | Connection,
        fts_query: str,
        document_id: Optional[str],
        status: Optional[str],
        legal_zone: Optional[str],
        limit: int,
    ) -> List[SearchHit]:
        """Run one variant; a query FTS5 rejects counts as zero results."""
        try:
            rows = queries.search_provisions_fts(
                db,
                fts_query=fts_query,
                document_id=document_id,
                status=status,
                legal_zone=legal_zone,
                limit=limit,
            )
        except OperationalError as e:
            logger.warning(
                f"FTS query rejected: {fts_query!r}",
                extra=log_error(e, fts_query=fts_query),
            )
            return []

        return [
            SearchHit(
                document_id=row["document_id"],
                document_title=row["document_title"] or "",
                provision_ref=row["provision_ref"],
                chapter=row["chapter"],
                title=row["title"],
                snippet=row["snippet"] or "",
                score=row["score"],
                legal_zone=row["legal_zone"],
                status=row["status"],
            )
            for row in rows
        ]


_service = None


def get_search_service() -> FTSSearchService:
    """Get singleton search service instance."""
    global _service
    if _service is None:
        _service = FTSSearchService()
    return _service
