"""Full-text search over provisions."""

from .fts_search import FTSSearchService, get_search_service
from .query_builder import SearchVariants, build_search_variants

__all__ = [
    "FTSSearchService",
    "SearchVariants",
    "build_search_variants",
    "get_search_service",
]
