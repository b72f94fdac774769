"""
get_provision: retrieve one provision, or every provision, of a document.

The document reference is resolved first (id, abbreviation, number/year or
title fragment). A provision reference may be given as ``article``,
``provision_ref`` or ``section``; the first one supplied is used.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from ...db import queries
from ...schemas.tools import ProvisionResult, ToolResponse
from ...utils.logging import get_logger
from ...utils.metadata import generate_response_metadata
from ..citation.validator import article_number
from ..resolver.statute_id import resolve_document_id

logger = get_logger(__name__)


def _to_result(document: Dict, provision: Dict) -> ProvisionResult:
    return ProvisionResult(
        document_id=document["id"],
        document_title=document["title"],
        provision_ref=provision["provision_ref"],
        chapter=provision["chapter"],
        section=provision["section"],
        title=provision["title"],
        content=provision["content"],
        article_number=article_number(provision["provision_ref"]),
        url=document["url"],
        legal_zone=document["legal_zone"],
        language=provision["language"],
    )


def get_provision(
    db: Session | Connection,
    document_id: str,
    article: Optional[str] = None,
    section: Optional[str] = None,
    provision_ref: Optional[str] = None,
) -> ToolResponse[List[ProvisionResult]]:
    """
    Retrieve provisions of a UAE federal law, DIFC law or ADGM regulation.

    Lookup order for a reference: provision_ref equality, ``art{ref}``,
    ``s{ref}``, section equality, then a substring match on provision_ref
    or section.

    Args:
        db: Session or Connection
        document_id: Any document reference the resolver accepts
        article: Article number, e.g. '2'
        section: Section number, e.g. '5A'
        provision_ref: Canonical reference, e.g. 'art2'

    Returns:
        ToolResponse with zero, one or all provisions; misses carry a note
    """
    resolved_id = resolve_document_id(db, document_id)
    if not resolved_id:
        return ToolResponse(
            results=[],
            metadata=generate_response_metadata(db, note=f'No document found matching "{document_id}"'),
        )

    document = queries.get_document(db, resolved_id)
    ref = article or provision_ref or section

    if ref:
        ref = ref.strip()
        provision = (
            queries.find_provision(db, resolved_id, ref)
            or queries.find_provision_fuzzy(db, resolved_id, ref)
        )
        if not provision:
            logger.info(f"Provision {ref!r} not found in {resolved_id}")
            return ToolResponse(
                results=[],
                metadata=generate_response_metadata(
                    db, note=f'Provision "{ref}" not found in document "{resolved_id}"'
                ),
            )
        return ToolResponse(
            results=[_to_result(document, provision)],
            metadata=generate_response_metadata(db),
        )

    provisions = queries.list_provisions(db, resolved_id)
    return ToolResponse(
        results=[_to_result(document, p) for p in provisions],
        metadata=generate_response_metadata(db),
    )
