"""
UAE Law Index - Ingestion Pipeline

Fetches the catalog of key laws from the three publishers, parses each page
into a structured document and writes one seed JSON file per law:

1. Federal: moj.gov.ae (Ministry of Justice)
2. DIFC: difclaws.com (Dubai International Financial Centre)
3. ADGM: adgm.com (Abu Dhabi Global Market)

Usage:
    uae-law-ingest                      # Full ingestion (all 3 sources)
    uae-law-ingest --limit 3            # First 3 laws per source
    uae-law-ingest --source difc        # DIFC only
    uae-law-ingest --skip-fetch         # Reuse seeds / cached HTML

Laws are processed one at a time, zone by zone. A failure on one law is
recorded in the report and the batch moves on.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .config.settings import settings
from .config.sources_config import SourcesConfig
from .schemas.document_contract import LawEntry, LegalZone
from .services.extraction.html_parser import parse_law_html
from .utils.logging import get_logger, log_document, log_error, log_timing, setup_logging

logger = get_logger(__name__)

ZONE_ORDER = (LegalZone.FEDERAL, LegalZone.DIFC, LegalZone.ADGM)
SOURCE_CHOICES = ("all",) + tuple(zone.value for zone in ZONE_ORDER)

STATUS_OK = "ok"
STATUS_CACHED = "cached"
FAILED_PREFIX = "FAILED: "

# (zone, url) -> page HTML
FetchFn = Callable[[LegalZone, str], str]


@dataclass
class IngestResult:
    """Outcome for one law."""
    id: str
    name: str
    zone: str
    provisions: int = 0
    definitions: int = 0
    status: str = STATUS_OK

    @property
    def failed(self) -> bool:
        return self.status.startswith(FAILED_PREFIX)


@dataclass
class IngestReport:
    results: List[IngestResult] = field(default_factory=list)

    @property
    def documents(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.failed)

    @property
    def provisions(self) -> int:
        return sum(r.provisions for r in self.results)

    @property
    def definitions(self) -> int:
        return sum(r.definitions for r in self.results)

    def format_table(self) -> str:
        """Per-law breakdown as a fixed-width table."""
        lines = [
            f"{'Zone':<10} {'Name':<24} {'Provisions':>12} {'Definitions':>13}  Status",
            f"{'-' * 10} {'-' * 24} {'-' * 12} {'-' * 13}  {'-' * 30}",
        ]
        for r in self.results:
            lines.append(f"{r.zone:<10} {r.name:<24} {r.provisions:>12} {r.definitions:>13}  {r.status}")
        return "\n".join(lines)


def default_fetch(zone: LegalZone, url: str) -> str:
    """Fetch a law page through the shared rate-limited fetcher."""
    from .crawler.fetcher import get_fetcher

    return get_fetcher().fetch_content(zone, url).body


def select_entries(source: str = "all", limit: Optional[int] = None) -> List[LawEntry]:
    """Catalog entries for the requested source, at most ``limit`` per zone."""
    zones = ZONE_ORDER if source == "all" else (LegalZone(source),)
    entries: List[LawEntry] = []
    for zone in zones:
        catalog = SourcesConfig.get_catalog(zone.value)
        entries.extend(catalog[:limit] if limit else catalog)
    return entries


def ingest_entry(
    entry: LawEntry,
    skip_fetch: bool,
    source_dir: Path,
    seed_dir: Path,
    fetch: FetchFn,
) -> IngestResult:
    """Fetch (or reuse), parse and write the seed of one law."""
    source_file = source_dir / f"{entry.id}.html"
    seed_file = seed_dir / f"{entry.id}.json"
    result = IngestResult(id=entry.id, name=entry.short_name, zone=entry.legal_zone.value)

    try:
        if skip_fetch and seed_file.exists():
            existing = json.loads(seed_file.read_text(encoding="utf-8"))
            result.provisions = len(existing.get("provisions", []))
            result.definitions = len(existing.get("definitions", []))
            result.status = STATUS_CACHED
            logger.info(f"SKIP {entry.short_name} (cached: {result.provisions} provisions)")
            return result

        if skip_fetch and source_file.exists():
            html = source_file.read_text(encoding="utf-8")
            logger.info(f"{entry.short_name}: parsed from cache")
        else:
            html = fetch(entry.legal_zone, entry.url)
            source_file.write_text(html, encoding="utf-8")
            logger.info(f"Fetched {entry.short_name} ({len(html) / 1024:.0f} KB)")

        document = parse_law_html(html, entry)
        seed_file.write_text(
            json.dumps(document.to_json_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    except Exception as e:
        message = str(e) or type(e).__name__
        logger.error(f"ERROR {entry.short_name}: {message}", extra=log_error(e, law_id=entry.id))
        result.status = f"{FAILED_PREFIX}{message[:80]}"
        return result

    result.provisions = len(document.provisions)
    result.definitions = len(document.definitions)
    logger.info(
        f"{entry.id} -> {result.provisions} provisions, {result.definitions} definitions",
        extra=log_document(entry.id, entry.legal_zone, provisions=result.provisions,
                           definitions=result.definitions),
    )
    return result


def ingest(
    entries: Iterable[LawEntry],
    skip_fetch: bool = False,
    source_dir: Optional[Path | str] = None,
    seed_dir: Optional[Path | str] = None,
    fetch: Optional[FetchFn] = None,
) -> IngestReport:
    """
    Ingest catalog entries sequentially, federal first, then DIFC, then ADGM.

    Args:
        entries: Catalog entries to process
        skip_fetch: Reuse existing seeds (status 'cached') or cached HTML
        source_dir: Directory for raw HTML (defaults to settings.source_dir)
        seed_dir: Directory for seed JSON (defaults to settings.seed_dir)
        fetch: Page fetcher, injectable for tests

    Returns:
        IngestReport with one result per entry
    """
    start_time = time.time()
    source_path = Path(source_dir or settings.source_dir)
    seed_path = Path(seed_dir or settings.seed_dir)
    SourcesConfig.create_directories([source_path, seed_path])
    fetch = fetch or default_fetch

    entries = list(entries)
    report = IngestReport()
    for zone in ZONE_ORDER:
        zone_entries = [e for e in entries if e.legal_zone == zone]
        if not zone_entries:
            continue
        logger.info(f"{zone.value}: {len(zone_entries)} laws from {SourcesConfig.get_base_url(zone)}")
        for entry in zone_entries:
            report.results.append(ingest_entry(entry, skip_fetch, source_path, seed_path, fetch))

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Ingestion finished: {report.documents} laws, {report.failed} failed, "
        f"{report.provisions} provisions, {report.definitions} definitions",
        extra=log_timing("ingest", duration_ms, documents=report.documents, failed=report.failed),
    )
    return report


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point: uae-law-ingest."""
    parser = argparse.ArgumentParser(description="Fetch and parse UAE legislation into seed JSON files")
    parser.add_argument("--limit", type=int, default=None, help="Maximum laws per source")
    parser.add_argument("--source", choices=SOURCE_CHOICES, default="all", help="Which publisher to ingest")
    parser.add_argument("--skip-fetch", action="store_true", help="Reuse existing seeds and cached HTML")
    parser.add_argument("--source-dir", default=settings.source_dir, help="Directory for raw HTML")
    parser.add_argument("--seed-dir", default=settings.seed_dir, help="Directory for seed JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else None)

    entries = select_entries(args.source, args.limit)
    report = ingest(entries, skip_fetch=args.skip_fetch, source_dir=args.source_dir, seed_dir=args.seed_dir)

    print("INGESTION REPORT")
    print("=" * 60)
    print(f"  Laws processed: {report.documents}")
    print(f"  Laws failed: {report.failed}")
    print(f"  Total provisions: {report.provisions}")
    print(f"  Total definitions: {report.definitions}")
    print()
    print(report.format_table())

    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
