"""Citation parsing, validation and formatting."""

from .formatter import format_citation, format_resolved_citation
from .parser import Citation, CitationParser, get_citation_parser, parse_citation
from .validator import ResolvedReference, resolve_citation, validate_citation

__all__ = [
    "Citation",
    "CitationParser",
    "ResolvedReference",
    "format_citation",
    "format_resolved_citation",
    "get_citation_parser",
    "parse_citation",
    "resolve_citation",
    "validate_citation",
]
