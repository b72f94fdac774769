"""
Statute ID resolution.

Resolves fuzzy document references (ids, abbreviations, "No. 45/2021",
title fragments) to canonical document ids across all three legal zones:

- Federal: fdl-45-2021, fl-2-2015, cd-10-2022
- DIFC: difc-law-5-2020
- ADGM: adgm-dpr-2021

Resolution is an ordered cascade of strategies; the first strategy that
returns an id wins and later strategies never run.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, Optional, Tuple

from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from ...db import queries
from ...utils.logging import get_logger

logger = get_logger(__name__)

Db = Session | Connection
Strategy = Callable[[Db, str], Optional[str]]

NUMBER_YEAR_PATTERN = re.compile(r'(?:No\.?\s*)?(\d+)\s*/\s*(\d{4})')

# Federal id shapes probed for "{number}/{year}" input, in this order
FEDERAL_ID_PREFIXES = ("fdl", "fl", "cd")

_TITLE_FIELDS = ("title", "short_name", "title_en")


def match_exact_id(db: Db, value: str) -> Optional[str]:
    """Stage 1: exact identifier equality."""
    return value if queries.document_exists(db, value) else None


def match_short_name(db: Db, value: str) -> Optional[str]:
    """Stage 2: case-insensitive exact short name / abbreviation."""
    return queries.find_document_by_short_name(db, value)


def match_number_year(db: Db, value: str) -> Optional[str]:
    """Stage 3: '45/2021' or 'No. 45/2021' probes fdl-, fl-, cd- ids."""
    match = NUMBER_YEAR_PATTERN.search(value)
    if not match:
        return None
    number, year = match.group(1), match.group(2)
    for prefix in FEDERAL_ID_PREFIXES:
        candidate = f"{prefix}-{number}-{year}"
        if queries.document_exists(db, candidate):
            return candidate
    return None


def _best_substring_match(
    documents: Iterable[Dict],
    needle: str,
    normalize: Callable[[str], str],
) -> Optional[str]:
    """
    Pick the document whose fields contain ``needle``.

    Among several candidates the one with the shortest containing field wins
    (the needle covers the largest share of it); equal lengths fall back to
    ingestion order, which is the iteration order of ``documents``.
    """
    target = normalize(needle)
    best: Optional[Tuple[int, int, str]] = None
    for position, document in enumerate(documents):
        lengths = [
            len(document[field])
            for field in _TITLE_FIELDS
            if document.get(field) and target in normalize(document[field])
        ]
        if not lengths:
            continue
        candidate = (min(lengths), position, document["id"])
        if best is None or candidate < best:
            best = candidate
    return best[2] if best else None


def match_title_substring(db: Db, value: str) -> Optional[str]:
    """Stage 4: case-sensitive substring of title, short name or English title."""
    return _best_substring_match(queries.list_documents(db), value, lambda s: s)


def match_title_substring_ci(db: Db, value: str) -> Optional[str]:
    """Stage 5: case-insensitive substring of the same fields."""
    return _best_substring_match(queries.list_documents(db), value, str.casefold)


RESOLUTION_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("exact_id", match_exact_id),
    ("short_name", match_short_name),
    ("number_year", match_number_year),
    ("title_substring", match_title_substring),
    ("title_substring_ci", match_title_substring_ci),
)


def resolve_document_id_with_stage(db: Db, value: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve and also report which strategy matched."""
    trimmed = (value or "").strip()
    if not trimmed:
        return None, None

    for stage, strategy in RESOLUTION_STRATEGIES:
        document_id = strategy(db, trimmed)
        if document_id:
            logger.debug(f"Resolved {trimmed!r} -> {document_id} via {stage}")
            return document_id, stage

    logger.debug(f"Could not resolve {trimmed!r}")
    return None, None


def resolve_document_id(db: Db, value: str) -> Optional[str]:
    """
    Resolve a user-supplied document reference to a canonical document id.

    Args:
        db: Session or Connection
        value: Arbitrary reference (id, abbreviation, number/year, title fragment)

    Returns:
        Document id, or None when nothing matches (empty input included)
    """
    document_id, _ = resolve_document_id_with_stage(db, value)
    return document_id
