"""
Database builder.

Loads seed JSON documents (as written by the ingestion pipeline) into the
database. Each document is replaced wholesale: its previous provisions,
definitions and FTS rows are removed before the new ones are written.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from sqlalchemy.orm import Session

from ..config.settings import settings
from ..schemas.document_contract import ParsedDocument, validate_document_json
from ..services.extraction.definition_extractor import deduplicate_definitions
from ..services.extraction.provision_extractor import deduplicate_provisions
from ..utils.logging import get_logger, log_document, log_error, log_timing, setup_logging
from . import queries
from .models import LegalDefinition, LegalDocument, LegalProvision

logger = get_logger(__name__)


@dataclass
class BuildReport:
    """Outcome of one database build."""
    documents: int = 0
    provisions: int = 0
    definitions: int = 0
    failed: List[str] = field(default_factory=list)
    built_at: Optional[str] = None


def _fts_enabled(db: Session) -> bool:
    return db.get_bind().url.get_backend_name() == "sqlite"


def load_document(db: Session, document: ParsedDocument, ingest_order: int) -> LegalDocument:
    """
    Insert one parsed document, replacing any previous version with the same id.

    Args:
        db: ORM session
        document: Validated document
        ingest_order: Position used to break ties during fuzzy resolution

    Returns:
        The new LegalDocument row (flushed, not committed)
    """
    existing = db.get(LegalDocument, document.id)
    if existing is not None:
        db.delete(existing)
        db.flush()

    row = LegalDocument(
        id=document.id,
        type=document.type,
        title=document.title,
        title_en=document.title_en,
        short_name=document.short_name,
        status=document.status,
        issued_date=document.issued_date,
        in_force_date=document.in_force_date,
        url=document.url,
        description=document.description,
        legal_zone=document.legal_zone,
        language=document.language,
        ingest_order=ingest_order,
    )
    row.provisions = [
        LegalProvision(
            provision_ref=p.provision_ref,
            chapter=p.chapter,
            section=p.section,
            title=p.title,
            content=p.content,
            language=p.language,
        )
        for p in deduplicate_provisions(document.provisions)
    ]
    row.definitions = [
        LegalDefinition(
            term=d.term,
            definition=d.definition,
            source_provision=d.source_provision,
        )
        for d in deduplicate_definitions(document.definitions)
    ]
    db.add(row)
    db.flush()

    if _fts_enabled(db):
        queries.index_document_fts(db, document.id)

    return row


def build_database(db: Session, seed_dir: Path | str) -> BuildReport:
    """
    Load every ``*.json`` seed file (sorted by name) into the database.

    Invalid seed files are logged and reported, never aborting the build.
    ``built_at`` and ``schema_version`` are recorded in db_metadata.
    """
    start_time = time.time()
    seed_path = Path(seed_dir)
    report = BuildReport()

    seed_files = sorted(seed_path.glob("*.json"))
    if not seed_files:
        logger.warning(f"No seed files found in {seed_path}")

    for order, seed_file in enumerate(seed_files):
        try:
            with seed_file.open(encoding="utf-8") as fh:
                document = validate_document_json(json.load(fh))
            row = load_document(db, document, ingest_order=order)
        except (ValueError, OSError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Skipping seed {seed_file.name}: {e}", extra=log_error(e, seed=seed_file.name))
            report.failed.append(seed_file.name)
            continue

        report.documents += 1
        report.provisions += len(row.provisions)
        report.definitions += len(row.definitions)
        logger.info(
            f"Loaded {document.id}: {len(row.provisions)} provisions, {len(row.definitions)} definitions",
            extra=log_document(document.id, document.legal_zone, provisions=len(row.provisions),
                               definitions=len(row.definitions)),
        )

    report.built_at = datetime.now(timezone.utc).isoformat()
    queries.write_db_metadata(db, {
        "built_at": report.built_at,
        "schema_version": settings.schema_version,
    })

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Database built: {report.documents} documents, {report.provisions} provisions, "
        f"{report.definitions} definitions ({len(report.failed)} failed)",
        extra=log_timing("build_database", duration_ms, documents=report.documents),
    )
    return report


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point: uae-law-build-db."""
    from .session import get_db_session, init_db

    parser = argparse.ArgumentParser(description="Build the UAE law database from seed JSON files")
    parser.add_argument("--seed-dir", default=settings.seed_dir, help="Directory of seed JSON documents")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else None)

    init_db()
    with get_db_session() as db:
        report = build_database(db, args.seed_dir)

    return 1 if report.failed or report.documents == 0 else 0


if __name__ == "__main__":
    sys.exit(main())
