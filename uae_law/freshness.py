"""
Data freshness check.

Verifies the database is not stale by comparing its ``built_at`` timestamp
with a threshold (default 30 days). Exits with status 1 when the database is
stale or has never been built.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config.settings import settings
from .db import queries
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class FreshnessReport:
    built_at: Optional[str]
    days_since_built: Optional[int]
    threshold_days: int
    document_count: int = 0
    provision_count: int = 0
    is_stale: bool = True
    message: str = ""


def _parse_timestamp(value: str) -> datetime:
    """ISO-8601 timestamp; a trailing 'Z' and naive values are read as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def check_freshness(
    db: Session | Connection,
    threshold_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> FreshnessReport:
    """
    Compare the database build time with the staleness threshold.

    Args:
        db: Session or Connection
        threshold_days: Maximum age in whole days (defaults to settings)
        now: Current time, injectable for tests

    Returns:
        FreshnessReport; stale when older than the threshold or never built
    """
    threshold = settings.staleness_threshold_days if threshold_days is None else threshold_days
    now = now or datetime.now(timezone.utc)

    try:
        built_at = queries.read_db_metadata(db).get("built_at")
    except SQLAlchemyError as e:
        logger.warning(f"Could not read db_metadata: {e}")
        built_at = None

    if not built_at:
        return FreshnessReport(
            built_at=None,
            days_since_built=None,
            threshold_days=threshold,
            message="No built_at timestamp found in database.",
        )

    elapsed = now - _parse_timestamp(built_at)
    days = int(elapsed.total_seconds() // SECONDS_PER_DAY)
    is_stale = days > threshold

    report = FreshnessReport(
        built_at=built_at,
        days_since_built=days,
        threshold_days=threshold,
        document_count=queries.count_rows(db, "legal_documents"),
        provision_count=queries.count_rows(db, "legal_provisions"),
        is_stale=is_stale,
    )
    if is_stale:
        report.message = f"STALE: Database is {days} days old (threshold: {threshold})."
    else:
        report.message = "OK: Database is fresh."
    return report


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point: uae-law-freshness."""
    from .db.session import get_db_session

    parser = argparse.ArgumentParser(description="Check whether the UAE law database is stale")
    parser.add_argument(
        "--threshold-days",
        type=int,
        default=settings.staleness_threshold_days,
        help="Maximum age in days before the database counts as stale",
    )
    args = parser.parse_args(argv)

    setup_logging()

    with get_db_session() as db:
        report = check_freshness(db, threshold_days=args.threshold_days)

    print("UAE Law Index -- Freshness Check")
    if report.built_at:
        print(f"  Built at: {report.built_at}")
        print(f"  Days since built: {report.days_since_built}")
        print(f"  Threshold: {report.threshold_days} days")
        print(f"  Documents: {report.document_count}")
        print(f"  Provisions: {report.provision_count}")
    print(f"  {report.message}")

    return 1 if report.is_stale else 0


if __name__ == "__main__":
    sys.exit(main())
