"""
Pytest configuration and shared fixtures for the UAE law index.

- In-memory SQLite database (StaticPool) with the FTS5 index, fresh per test
- Seeded federal, DIFC and ADGM documents loaded through the DB builder
- Factories for catalog entries and parsed documents
- Fake clock / sleeper for rate limiting and backoff tests
"""

import os
import sqlite3
from typing import Generator, List, Optional, Tuple

# Set test environment variables before any imports
os.environ.update({
    "UAE_LAW_DATABASE_URL": "sqlite:///:memory:",
    "UAE_LAW_LOG_LEVEL": "WARNING",
    "UAE_LAW_LOG_STRUCTURED": "false",
    "UAE_LAW_REQUEST_MIN_INTERVAL": "0",
})

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from uae_law.db import queries
from uae_law.db.builder import load_document
from uae_law.db.session import drop_db, init_db
from uae_law.schemas.document_contract import (
    DocStatus,
    LawEntry,
    LegalZone,
    ParsedDefinition,
    ParsedDocument,
    ParsedProvision,
)

BUILT_AT = "2026-01-15T08:00:00+00:00"


def _fts5_available() -> bool:
    conn = sqlite3.connect(":memory:")
    try:
        conn.execute("CREATE VIRTUAL TABLE probe USING fts5(x)")
        return True
    except sqlite3.OperationalError:
        return False
    finally:
        conn.close()


FTS5_AVAILABLE = _fts5_available()


# ================================
# FACTORIES
# ================================

# (provision_ref, section, content, title, chapter)
ProvisionRow = Tuple[str, str, str, Optional[str], Optional[str]]


def make_document(
    doc_id: str,
    title: str,
    short_name: str,
    legal_zone: LegalZone,
    provisions: List[ProvisionRow] = (),
    status: DocStatus = DocStatus.IN_FORCE,
    language: str = "en",
    title_en: Optional[str] = None,
    definitions: List[ParsedDefinition] = (),
) -> ParsedDocument:
    return ParsedDocument(
        id=doc_id,
        title=title,
        title_en=title_en or title,
        short_name=short_name,
        status=status,
        issued_date="2021-09-20",
        in_force_date="2022-01-02",
        url=f"https://example.test/{doc_id}",
        legal_zone=legal_zone,
        language=language,
        provisions=[
            ParsedProvision(
                provision_ref=ref,
                section=section,
                content=content,
                title=p_title or "",
                chapter=chapter,
                language=language,
            )
            for ref, section, content, p_title, chapter in provisions
        ],
        definitions=list(definitions),
    )


def make_entry(
    doc_id: str = "fdl-45-2021",
    legal_zone: LegalZone = LegalZone.FEDERAL,
    title: str = "Federal Decree-Law No. 45 of 2021 on the Protection of Personal Data",
    short_name: str = "PDPL",
    title_en: Optional[str] = None,
    url: str = "/en/legislation/federal-decree-law-45-2021",
) -> LawEntry:
    return LawEntry(
        id=doc_id,
        title=title,
        title_en=title_en,
        short_name=short_name,
        legal_zone=legal_zone,
        doc_type="fdl",
        number=45,
        year=2021,
        issued_date="2021-09-20",
        in_force_date="2022-01-02",
        url=url,
    )


PDPL_TITLE = "Federal Decree-Law No. 45 of 2021 on the Protection of Personal Data"
CYBERCRIME_TITLE_AR = "المرسوم بقانون اتحادي رقم 34 لسنة 2021 في شأن مكافحة الشائعات والجرائم الإلكترونية"
DIFC_DPL_TITLE = "DIFC Data Protection Law, DIFC Law No. 5 of 2020"
ADGM_DPR_TITLE = "ADGM Data Protection Regulations 2021"
DIFC_ID = "difc-law-5-2020"


def sample_documents() -> List[ParsedDocument]:
    """Documents across all three zones and every status."""
    return [
        make_document(
            "fdl-45-2021", PDPL_TITLE, "PDPL", LegalZone.FEDERAL,
            provisions=[
                ("art1", "1", "In this Decree-Law, Personal Data means any data relating to a natural person.",
                 "Definitions", "Chapter 1 - General Provisions"),
                ("art2", "2", "The provisions of this Decree-Law apply to the processing of personal data "
                 "inside and outside the State.", "Scope of Application", "Chapter 1 - General Provisions"),
                ("art5A", "5A", "Controllers shall notify the Data Office of any breach of personal data.",
                 "Breach Notification", "Chapter 2 - Obligations"),
            ],
            definitions=[
                ParsedDefinition(
                    term="Personal Data",
                    definition="“Personal Data” any data relating to a natural person.",
                    source_provision="art1",
                ),
            ],
        ),
        make_document(
            "fdl-34-2021", CYBERCRIME_TITLE_AR, "Cybercrimes Law", LegalZone.FEDERAL,
            title_en="Federal Decree-Law No. 34 of 2021 on Combatting Rumours and Cybercrimes",
            language="ar",
            provisions=[
                ("art1", "1", "في تطبيق أحكام هذا المرسوم بقانون يقصد بالكلمات التالية المعاني المبينة قرين كل منها.",
                 "التعريفات", None),
            ],
        ),
        make_document(
            "fl-2-2015", "Federal Law No. 2 of 2015 on Commercial Companies", "Companies Law",
            LegalZone.FEDERAL, status=DocStatus.AMENDED,
            provisions=[("art1", "1", "This Law applies to commercial companies established in the State.",
                         None, None)],
        ),
        make_document(
            "fl-3-2003", "Federal Law No. 3 of 2003 on Telecommunications Regulation", "Telecom Law",
            LegalZone.FEDERAL, status=DocStatus.REPEALED,
            provisions=[("art1", "1", "The telecommunications sector is regulated by the Authority.",
                         None, None)],
        ),
        make_document(
            "cd-10-2022", "Cabinet Decision No. 10 of 2022 on Data Standards", "Data Standards Decision",
            LegalZone.FEDERAL, status=DocStatus.NOT_YET_IN_FORCE,
        ),
        make_document(
            DIFC_ID, DIFC_DPL_TITLE, "DIFC DPL", LegalZone.DIFC,
            provisions=[
                ("s1", "1", "This Law may be cited as the Data Protection Law 2020.", "Title", "Part 1: General"),
                ("s10", "10", "A Controller shall implement appropriate technical and organisational measures.",
                 "Accountability", "Part 2: General Requirements"),
            ],
        ),
        make_document(
            "adgm-dpr-2021", ADGM_DPR_TITLE, "ADGM DPR", LegalZone.ADGM,
            provisions=[
                ("s1", "1", "These Regulations may be cited as the Data Protection Regulations 2021.",
                 "Citation", "Part 1 - Preliminary"),
                ("s2", "2", "These Regulations apply to the processing of personal data within the Abu Dhabi "
                 "Global Market.", "Application", "Part 1 - Preliminary"),
            ],
        ),
    ]


# ================================
# DATABASE FIXTURES
# ================================

@pytest.fixture
def test_engine():
    """Fresh in-memory SQLite engine with all tables and the FTS5 index."""
    if not FTS5_AVAILABLE:
        pytest.skip("SQLite build lacks FTS5")

    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine) -> Generator[Session, None, None]:
    """Session per test, rolled back afterwards."""
    session = sessionmaker(bind=test_engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def seeded_db(db_session) -> Session:
    """Session holding the sample documents and a built_at timestamp."""
    for order, document in enumerate(sample_documents()):
        load_document(db_session, document, ingest_order=order)
    queries.write_db_metadata(db_session, {"built_at": BUILT_AT, "schema_version": "1"})
    db_session.flush()
    return db_session


# ================================
# UTILITY FIXTURES
# ================================

class FakeClock:
    """Manually advanced monotonic clock; sleeping advances it."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Tests against an in-memory SQLite database")
