"""SQLAlchemy models for the UAE law index."""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from ..schemas.document_contract import DocStatus, LegalZone

Base = declarative_base()


def _enum_values(enum_cls):
    """Persist str enums by value ('in_force'), not by member name."""
    return [member.value for member in enum_cls]


class LegalDocument(Base):
    """One statute, DIFC law or ADGM regulation."""

    __tablename__ = "legal_documents"

    # Zone-specific identifier, e.g. 'fdl-45-2021', 'difc-law-5-2020', 'adgm-dpr-2021'
    id = Column(String(100), primary_key=True)

    type = Column(String(50), nullable=False, default="statute")
    title = Column(Text, nullable=False)
    title_en = Column(Text)
    short_name = Column(String(200), index=True)
    status = Column(
        Enum(DocStatus, values_callable=_enum_values, native_enum=False, length=32),
        nullable=False,
        default=DocStatus.IN_FORCE,
        index=True,
    )
    issued_date = Column(String(10))
    in_force_date = Column(String(10))
    url = Column(Text)
    description = Column(Text)
    legal_zone = Column(
        Enum(LegalZone, values_callable=_enum_values, native_enum=False, length=16),
        nullable=False,
        index=True,
    )
    language = Column(String(10), nullable=False)

    # Stable insertion order used to break ties during fuzzy resolution
    ingest_order = Column(Integer, nullable=False, default=0, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    provisions = relationship(
        "LegalProvision",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="LegalProvision.id",
    )
    definitions = relationship(
        "LegalDefinition",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="LegalDefinition.id",
    )


class LegalProvision(Base):
    """An individually addressable article or section."""

    __tablename__ = "legal_provisions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(100), ForeignKey("legal_documents.id", ondelete="CASCADE"), nullable=False, index=True)

    provision_ref = Column(String(50), nullable=False)  # artN / sN
    chapter = Column(Text)
    section = Column(String(50), nullable=False)       # raw number, e.g. "5A"
    title = Column(Text)
    content = Column(Text, nullable=False)
    language = Column(String(10))

    document = relationship("LegalDocument", back_populates="provisions")

    __table_args__ = (
        UniqueConstraint("document_id", "provision_ref", name="uq_provision_doc_ref"),
        Index("idx_provision_doc_section", "document_id", "section"),
    )


class LegalDefinition(Base):
    """A defined term mined from a definitions provision."""

    __tablename__ = "definitions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(100), ForeignKey("legal_documents.id", ondelete="CASCADE"), nullable=False, index=True)

    term = Column(Text, nullable=False)
    definition = Column(Text, nullable=False)
    source_provision = Column(String(50))

    document = relationship("LegalDocument", back_populates="definitions")

    __table_args__ = (
        UniqueConstraint("document_id", "term", name="uq_definition_doc_term"),
    )


class DbMetadata(Base):
    """Key/value build metadata (built_at, schema_version, tier)."""

    __tablename__ = "db_metadata"

    key = Column(String(100), primary_key=True)
    value = Column(Text)


# --- DB extras (FTS5 virtual table) centralised here ---
def setup_db_extras(engine) -> None:
    """Apply DDL that is not expressible purely via ORM metadata.

    - Create the ``provisions_fts`` FTS5 table (SQLite only); ids are stored
      UNINDEXED so they can be filtered and joined without being tokenized
    """
    if engine.url.get_backend_name() != "sqlite":
        return

    with engine.begin() as conn:
        conn.execute(text(
            """
            CREATE VIRTUAL TABLE IF NOT EXISTS provisions_fts USING fts5(
                document_id UNINDEXED,
                provision_ref UNINDEXED,
                title,
                content,
                tokenize='unicode61'
            )
            """
        ))


def drop_db_extras(engine) -> None:
    """Drop tables created by setup_db_extras."""
    if engine.url.get_backend_name() != "sqlite":
        return

    with engine.begin() as conn:
        conn.execute(text("DROP TABLE IF EXISTS provisions_fts"))
