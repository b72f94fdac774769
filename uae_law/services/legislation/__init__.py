"""Retrieval tools over the UAE law database."""

from .citations import format_citation_tool, search_legislation, validate_citation_tool
from .currency import check_currency
from .provisions import get_provision
from .sources import list_sources

__all__ = [
    "check_currency",
    "format_citation_tool",
    "get_provision",
    "list_sources",
    "search_legislation",
    "validate_citation_tool",
]
