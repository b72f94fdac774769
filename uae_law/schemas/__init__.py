from .document_contract import (
    DocStatus,
    LawEntry,
    LegalZone,
    ParsedDefinition,
    ParsedDocument,
    ParsedProvision,
    validate_document_json,
)
from .search import SearchHit, SearchMetadata, SearchResponse
from .tools import (
    CurrencyResult,
    DatabaseInfo,
    FormattedCitation,
    ProvisionResult,
    ResponseMetadata,
    SourceInfo,
    SourcesResult,
    ToolResponse,
    ValidateCitationResult,
)

__all__ = [
    "DocStatus",
    "LawEntry",
    "LegalZone",
    "ParsedDefinition",
    "ParsedDocument",
    "ParsedProvision",
    "validate_document_json",
    "SearchHit",
    "SearchMetadata",
    "SearchResponse",
    "CurrencyResult",
    "DatabaseInfo",
    "FormattedCitation",
    "ProvisionResult",
    "ResponseMetadata",
    "SourceInfo",
    "SourcesResult",
    "ToolResponse",
    "ValidateCitationResult",
]
