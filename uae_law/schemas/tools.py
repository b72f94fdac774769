"""
Retrieval tool schemas.

Every retrieval tool returns a ``ToolResponse`` that wraps its results with
provenance metadata (data source, jurisdiction, disclaimer, freshness).
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ResponseMetadata(BaseModel):
    """Provenance attached to every tool response."""
    data_source: str
    jurisdiction: str = "AE"
    disclaimer: str
    freshness: Optional[str] = Field(default=None, description="built_at of the database")
    note: Optional[str] = None


class ToolResponse(BaseModel, Generic[T]):
    results: T
    metadata: ResponseMetadata


class ProvisionResult(BaseModel):
    """One provision as returned by get_provision."""
    document_id: str
    document_title: str
    provision_ref: str
    chapter: Optional[str] = None
    section: str
    title: Optional[str] = None
    content: str
    article_number: Optional[str] = None
    url: Optional[str] = None
    legal_zone: Optional[str] = None
    language: Optional[str] = None


class CurrencyResult(BaseModel):
    document_id: str
    title: str
    status: str
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    legal_zone: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class ValidateCitationResult(BaseModel):
    """Outcome of validating a citation against the database."""
    valid: bool
    citation: str
    normalized: Optional[str] = None
    document_id: Optional[str] = None
    document_title: Optional[str] = None
    provision_ref: Optional[str] = None
    status: Optional[str] = None
    legal_zone: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class FormattedCitation(BaseModel):
    original: str
    formatted: str
    format: str


class SourceInfo(BaseModel):
    name: str
    authority: str
    url: str
    license: str
    jurisdiction: str
    coverage: str
    languages: List[str]
    legal_zone: str


class DatabaseInfo(BaseModel):
    schema_version: Optional[str] = None
    built_at: Optional[str] = None
    document_count: int = 0
    provision_count: int = 0
    definition_count: int = 0


class SourcesResult(BaseModel):
    jurisdiction: str = "United Arab Emirates (AE)"
    legal_system_note: str
    sources: List[SourceInfo]
    database: DatabaseInfo
