"""Document reference resolution."""

from .statute_id import RESOLUTION_STRATEGIES, resolve_document_id, resolve_document_id_with_stage

__all__ = [
    "RESOLUTION_STRATEGIES",
    "resolve_document_id",
    "resolve_document_id_with_stage",
]
