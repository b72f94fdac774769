"""
Citation validation against the database.

A citation is valid when its document resolves and, if it names an article
or section, that provision exists. The force status of the law never makes a
citation invalid; repealed and amended laws only add a warning.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from ...db import queries
from ...schemas.document_contract import DocStatus, LegalZone
from ...schemas.tools import ValidateCitationResult
from ...utils.logging import get_logger
from ..resolver.statute_id import resolve_document_id
from .parser import Citation, parse_citation

logger = get_logger(__name__)

_REF_PREFIX_RE = re.compile(r'^(?:art|s)')

# Numbering label and abbreviation per legal zone
ZONE_LABELS: Dict[str, tuple] = {
    LegalZone.FEDERAL.value: ("Article", "Art."),
    LegalZone.DIFC.value: ("Section", "s"),
    LegalZone.ADGM.value: ("Section", "s"),
}

REPEALED_WARNING = "WARNING: This law has been repealed."
AMENDED_WARNING = "Note: This law has been amended. Verify you are referencing the current version."
UNPARSABLE_WARNING = "Could not parse citation format"


@dataclass
class ResolvedReference:
    """A citation resolved to a stored document and, optionally, a provision."""
    document_id: str
    provision_ref: Optional[str]
    label: str
    abbreviation: str
    document_title: str
    short_name: Optional[str]
    legal_zone: Optional[str]
    status: Optional[str]

    @property
    def number(self) -> Optional[str]:
        """Provision number without its art/s prefix."""
        return article_number(self.provision_ref) if self.provision_ref else None

    def to_dict(self) -> Dict:
        return asdict(self)


def article_number(provision_ref: str) -> str:
    """'art5A' -> '5A', 's12' -> '12'."""
    return _REF_PREFIX_RE.sub('', provision_ref)


def zone_labels(legal_zone: Optional[str]) -> tuple:
    """(label, abbreviation) for a stored legal zone; non-federal zones use sections."""
    return ZONE_LABELS.get(legal_zone or "", ("Section", "s"))


def status_warnings(status: Optional[str]) -> List[str]:
    if status == DocStatus.REPEALED.value:
        return [REPEALED_WARNING]
    if status == DocStatus.AMENDED.value:
        return [AMENDED_WARNING]
    return []


def resolve_citation(db: Session | Connection, citation: str | Citation) -> Optional[ResolvedReference]:
    """
    Resolve a citation to a document and provision.

    Args:
        db: Session or Connection
        citation: Citation text or an already parsed Citation

    Returns:
        ResolvedReference, or None when the text is empty, the document does
        not resolve, or a named provision does not exist
    """
    parsed = parse_citation(citation) if isinstance(citation, str) else citation
    if parsed is None:
        return None

    document_id = resolve_document_id(db, parsed.document_ref)
    if not document_id:
        return None
    document = queries.get_document(db, document_id)

    provision_ref = None
    if parsed.article_ref:
        provision = queries.find_provision(db, document_id, parsed.article_ref)
        if not provision:
            return None
        provision_ref = provision["provision_ref"]

    label, abbreviation = zone_labels(document["legal_zone"])
    return ResolvedReference(
        document_id=document_id,
        provision_ref=provision_ref,
        label=label,
        abbreviation=abbreviation,
        document_title=document["title"],
        short_name=document["short_name"],
        legal_zone=document["legal_zone"],
        status=document["status"],
    )


def validate_citation(db: Session | Connection, citation: str) -> ValidateCitationResult:
    """
    Validate a citation string against the database.

    Misses are reported through ``valid=False`` and ``warnings``; this
    function does not raise for unknown laws or provisions.
    """
    parsed = parse_citation(citation)
    if parsed is None:
        return ValidateCitationResult(valid=False, citation=citation, warnings=[UNPARSABLE_WARNING])

    document_id = resolve_document_id(db, parsed.document_ref)
    if not document_id:
        logger.info(f"Citation {citation!r}: document {parsed.document_ref!r} not found")
        return ValidateCitationResult(
            valid=False,
            citation=citation,
            warnings=[f'Document not found: "{parsed.document_ref}"'],
        )

    document = queries.get_document(db, document_id)
    warnings = status_warnings(document["status"])

    if not parsed.article_ref:
        return ValidateCitationResult(
            valid=True,
            citation=citation,
            normalized=document["title"],
            document_id=document_id,
            document_title=document["title"],
            status=document["status"],
            legal_zone=document["legal_zone"],
            warnings=warnings,
        )

    provision = queries.find_provision(db, document_id, parsed.article_ref)
    if not provision:
        return ValidateCitationResult(
            valid=False,
            citation=citation,
            document_id=document_id,
            document_title=document["title"],
            legal_zone=document["legal_zone"],
            warnings=warnings + [f'Provision "{parsed.article_ref}" not found in {document["title"]}'],
        )

    prefix, _ = zone_labels(document["legal_zone"])
    return ValidateCitationResult(
        valid=True,
        citation=citation,
        normalized=f"{prefix} {article_number(provision['provision_ref'])}, {document['title']}",
        document_id=document_id,
        document_title=document["title"],
        provision_ref=provision["provision_ref"],
        status=document["status"],
        legal_zone=document["legal_zone"],
        warnings=warnings,
    )
