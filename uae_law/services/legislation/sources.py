"""list_sources: provenance of the data plus database statistics."""

from __future__ import annotations

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config.sources_config import SourcesConfig
from ...db import queries
from ...schemas.tools import DatabaseInfo, SourceInfo, SourcesResult, ToolResponse
from ...utils.logging import get_logger
from ...utils.metadata import generate_response_metadata

logger = get_logger(__name__)


def _safe_count(db: Session | Connection, table: str) -> int:
    try:
        return queries.count_rows(db, table)
    except SQLAlchemyError as e:
        logger.warning(f"Could not count {table}: {e}")
        return 0


def database_info(db: Session | Connection) -> DatabaseInfo:
    try:
        meta = queries.read_db_metadata(db)
    except SQLAlchemyError as e:
        logger.warning(f"Could not read db_metadata: {e}")
        meta = {}

    return DatabaseInfo(
        schema_version=meta.get("schema_version"),
        built_at=meta.get("built_at"),
        document_count=_safe_count(db, "legal_documents"),
        provision_count=_safe_count(db, "legal_provisions"),
        definition_count=_safe_count(db, "definitions"),
    )


def list_sources(db: Session | Connection) -> ToolResponse[SourcesResult]:
    """Describe the three publishers and the current database build."""
    result = SourcesResult(
        legal_system_note=SourcesConfig.LEGAL_SYSTEM_NOTE,
        sources=[SourceInfo(**source) for source in SourcesConfig.get_sources()],
        database=database_info(db),
    )
    return ToolResponse(results=result, metadata=generate_response_metadata(db))
