"""Response metadata attached to every retrieval tool result."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import queries
from ..schemas.tools import ResponseMetadata
from .logging import get_logger

logger = get_logger(__name__)

DATA_SOURCE = (
    "UAE Ministry of Justice (moj.gov.ae), DIFC Laws (difclaws.com), "
    "ADGM Legal Framework (adgm.com) - "
    "UAE Ministry of Justice, DIFC Courts, ADGM Registration Authority"
)

JURISDICTION = "AE"

DISCLAIMER = (
    "This data is sourced from official UAE government portals. "
    "Arabic is the authoritative language for federal legislation; "
    "English translations are unofficial unless from DIFC/ADGM. "
    "The UAE has a three-layer legal system: federal law, DIFC (Dubai free zone), "
    "and ADGM (Abu Dhabi free zone). "
    "Always verify with the official portals at moj.gov.ae, difclaws.com, or adgm.com."
)


def read_built_at(db: Session | Connection) -> Optional[str]:
    """``built_at`` from db_metadata, or None when absent or unreadable."""
    try:
        return queries.read_db_metadata(db).get("built_at")
    except SQLAlchemyError as e:
        logger.warning(f"Could not read db_metadata: {e}")
        return None


def generate_response_metadata(db: Session | Connection, note: Optional[str] = None) -> ResponseMetadata:
    """
    Build the provenance block for a tool response.

    Args:
        db: Session or Connection
        note: Optional human-readable note (e.g. why results are empty)
    """
    return ResponseMetadata(
        data_source=DATA_SOURCE,
        jurisdiction=JURISDICTION,
        disclaimer=DISCLAIMER,
        freshness=read_built_at(db),
        note=note,
    )
