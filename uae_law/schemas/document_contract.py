"""Canonical document JSON contract with validation.

The shape produced by the zone parsers and consumed by the database builder:
``{id, type: "statute", title, title_en, short_name, status, issued_date,
in_force_date, url, legal_zone, language, provisions[], definitions[]}``.
"""

from __future__ import annotations

import enum
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError


class LegalZone(str, enum.Enum):
    """Legislative body a document belongs to."""
    FEDERAL = "federal"
    DIFC = "difc"
    ADGM = "adgm"


class DocStatus(str, enum.Enum):
    """Force status of a document."""
    IN_FORCE = "in_force"
    AMENDED = "amended"
    REPEALED = "repealed"
    NOT_YET_IN_FORCE = "not_yet_in_force"


class ParsedProvision(BaseModel):
    provision_ref: str
    chapter: Optional[str] = None
    section: str
    title: str = ""
    content: str
    language: str


class ParsedDefinition(BaseModel):
    term: str
    definition: str
    source_provision: Optional[str] = None


class LawEntry(BaseModel):
    """Catalog entry describing one law to ingest."""
    id: str
    title: str
    title_en: Optional[str] = None
    short_name: str
    legal_zone: LegalZone
    doc_type: str  # fdl, fl, cd, law, regulations
    number: int = 0
    year: int
    status: DocStatus = DocStatus.IN_FORCE
    issued_date: str
    in_force_date: str
    url: str


class ParsedDocument(BaseModel):
    id: str
    type: str = "statute"
    title: str
    title_en: str
    short_name: str
    status: DocStatus
    issued_date: str
    in_force_date: str
    url: str
    description: Optional[str] = None
    legal_zone: LegalZone
    language: str
    provisions: List[ParsedProvision] = Field(default_factory=list)
    definitions: List[ParsedDefinition] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """Interchange representation, omitting an absent description."""
        data = self.model_dump(mode="json")
        if data.get("description") is None:
            data.pop("description", None)
        return data


def validate_document_json(obj: dict) -> ParsedDocument:
    """Validate and return ParsedDocument, raising verbose errors."""
    try:
        return ParsedDocument.model_validate(obj)
    except ValidationError as exc:
        errors = [f"{e['loc']}: {e['msg']}" for e in exc.errors()]
        raise ValueError("Invalid document JSON: " + "; ".join(errors))
