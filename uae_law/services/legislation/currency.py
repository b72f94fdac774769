"""check_currency: is a law currently in force?"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from ...db import queries
from ...schemas.document_contract import DocStatus
from ...schemas.tools import CurrencyResult, ToolResponse
from ...utils.metadata import generate_response_metadata
from ..resolver.statute_id import resolve_document_id

NOT_FOUND_STATUS = "not_found"


def currency_warnings(status: Optional[str]) -> List[str]:
    if status == DocStatus.REPEALED.value:
        return ["This law has been repealed and is no longer in force."]
    if status == DocStatus.NOT_YET_IN_FORCE.value:
        return ["This law has not yet entered into force."]
    return []


def check_currency(db: Session | Connection, document_id: str) -> ToolResponse[CurrencyResult]:
    """
    Report the force status, dates and zone of a law.

    An unresolvable reference yields status 'not_found' with a warning
    naming the input; it is not an error.
    """
    resolved_id = resolve_document_id(db, document_id)
    if not resolved_id:
        result = CurrencyResult(
            document_id=document_id,
            title="Unknown",
            status=NOT_FOUND_STATUS,
            warnings=[f'Document not found: "{document_id}"'],
        )
        return ToolResponse(results=result, metadata=generate_response_metadata(db))

    document = queries.get_document(db, resolved_id)
    result = CurrencyResult(
        document_id=document["id"],
        title=document["title"],
        status=document["status"],
        issued_date=document["issued_date"],
        in_force_date=document["in_force_date"],
        legal_zone=document["legal_zone"],
        warnings=currency_warnings(document["status"]),
    )
    return ToolResponse(results=result, metadata=generate_response_metadata(db))
