"""Centralized DB query layer for the UAE law index.

All functions accept either a SQLAlchemy Session or Connection and return
plain dicts, so services never depend on ORM instances.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

_DOCUMENT_COLUMNS = (
    "id, type, title, title_en, short_name, status, issued_date, in_force_date, "
    "url, description, legal_zone, language, ingest_order"
)

_PROVISION_COLUMNS = (
    "id, document_id, provision_ref, chapter, section, title, content, language"
)

# Tables whose row counts are reported by list_sources / freshness
_COUNTABLE_TABLES = {"legal_documents", "legal_provisions", "definitions"}


def _conn(db: Session | Connection) -> Connection:
    return db.connection() if isinstance(db, Session) else db


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_document(db: Session | Connection, document_id: str) -> Optional[Dict[str, Any]]:
    """Fetch one document row by exact id."""
    conn = _conn(db)
    sql = text(f"SELECT {_DOCUMENT_COLUMNS} FROM legal_documents WHERE id = :id")
    row = conn.execute(sql, {"id": document_id}).mappings().first()
    return dict(row) if row else None


def document_exists(db: Session | Connection, document_id: str) -> bool:
    conn = _conn(db)
    sql = text("SELECT 1 FROM legal_documents WHERE id = :id")
    return conn.execute(sql, {"id": document_id}).first() is not None


def find_document_by_short_name(db: Session | Connection, short_name: str) -> Optional[str]:
    """Case-insensitive exact short-name match, earliest ingested first."""
    conn = _conn(db)
    sql = text(
        """
        SELECT id FROM legal_documents
        WHERE LOWER(short_name) = LOWER(:name)
        ORDER BY ingest_order, id
        LIMIT 1
        """
    )
    row = conn.execute(sql, {"name": short_name}).first()
    return row[0] if row else None


def list_documents(db: Session | Connection) -> List[Dict[str, Any]]:
    """All documents in ingestion order."""
    conn = _conn(db)
    sql = text(f"SELECT {_DOCUMENT_COLUMNS} FROM legal_documents ORDER BY ingest_order, id")
    return [dict(r) for r in conn.execute(sql).mappings().all()]


def get_provision_by_ref(
    db: Session | Connection,
    document_id: str,
    provision_ref: str,
) -> Optional[Dict[str, Any]]:
    conn = _conn(db)
    sql = text(
        f"""
        SELECT {_PROVISION_COLUMNS} FROM legal_provisions
        WHERE document_id = :doc AND provision_ref = :ref
        """
    )
    row = conn.execute(sql, {"doc": document_id, "ref": provision_ref}).mappings().first()
    return dict(row) if row else None


def get_provision_by_section(
    db: Session | Connection,
    document_id: str,
    section: str,
) -> Optional[Dict[str, Any]]:
    conn = _conn(db)
    sql = text(
        f"""
        SELECT {_PROVISION_COLUMNS} FROM legal_provisions
        WHERE document_id = :doc AND section = :section
        ORDER BY id
        LIMIT 1
        """
    )
    row = conn.execute(sql, {"doc": document_id, "section": section}).mappings().first()
    return dict(row) if row else None


def find_provision(
    db: Session | Connection,
    document_id: str,
    ref: str,
) -> Optional[Dict[str, Any]]:
    """Exact provision lookup, first hit wins.

    Order: provision_ref == ref, provision_ref == 'art' + ref,
    provision_ref == 's' + ref, section == ref.
    """
    for candidate in (ref, f"art{ref}", f"s{ref}"):
        provision = get_provision_by_ref(db, document_id, candidate)
        if provision:
            return provision
    return get_provision_by_section(db, document_id, ref)


def find_provision_fuzzy(
    db: Session | Connection,
    document_id: str,
    ref: str,
) -> Optional[Dict[str, Any]]:
    """Substring match on provision_ref or section, in ingestion order."""
    conn = _conn(db)
    sql = text(
        f"""
        SELECT {_PROVISION_COLUMNS} FROM legal_provisions
        WHERE document_id = :doc
          AND (provision_ref LIKE :pattern ESCAPE '\\' OR section LIKE :pattern ESCAPE '\\')
        ORDER BY id
        LIMIT 1
        """
    )
    pattern = f"%{_escape_like(ref)}%"
    row = conn.execute(sql, {"doc": document_id, "pattern": pattern}).mappings().first()
    return dict(row) if row else None


def list_provisions(db: Session | Connection, document_id: str) -> List[Dict[str, Any]]:
    """All provisions of a document in ingestion order."""
    conn = _conn(db)
    sql = text(
        f"SELECT {_PROVISION_COLUMNS} FROM legal_provisions WHERE document_id = :doc ORDER BY id"
    )
    return [dict(r) for r in conn.execute(sql, {"doc": document_id}).mappings().all()]


def list_definitions(db: Session | Connection, document_id: str) -> List[Dict[str, Any]]:
    conn = _conn(db)
    sql = text(
        """
        SELECT term, definition, source_provision FROM definitions
        WHERE document_id = :doc ORDER BY id
        """
    )
    return [dict(r) for r in conn.execute(sql, {"doc": document_id}).mappings().all()]


def search_provisions_fts(
    db: Session | Connection,
    *,
    fts_query: str,
    document_id: Optional[str] = None,
    status: Optional[str] = None,
    legal_zone: Optional[str] = None,
    limit: int = 10,
) -> List[Dict[str, Any]]:
    """FTS5 retrieval over provisions_fts ranked by bm25() (lower is better)."""
    conn = _conn(db)

    filters = ["provisions_fts MATCH :q"]
    params: Dict[str, Any] = {"q": fts_query, "limit": limit}
    if document_id:
        filters.append("provisions_fts.document_id = :doc")
        params["doc"] = document_id
    if status:
        filters.append("d.status = :status")
        params["status"] = status
    if legal_zone:
        filters.append("d.legal_zone = :zone")
        params["zone"] = legal_zone

    sql = text(
        f"""
        SELECT provisions_fts.document_id, provisions_fts.provision_ref,
               d.title AS document_title, d.legal_zone, d.status,
               p.chapter, p.title,
               snippet(provisions_fts, 3, '>>>', '<<<', '...', 32) AS snippet,
               bm25(provisions_fts) AS score
        FROM provisions_fts
        JOIN legal_documents d ON d.id = provisions_fts.document_id
        LEFT JOIN legal_provisions p
               ON p.document_id = provisions_fts.document_id
              AND p.provision_ref = provisions_fts.provision_ref
        WHERE {' AND '.join(filters)}
        ORDER BY score
        LIMIT :limit
        """
    )
    return [dict(r) for r in conn.execute(sql, params).mappings().all()]


def index_document_fts(db: Session | Connection, document_id: str) -> int:
    """Replace the FTS rows of one document from legal_provisions."""
    conn = _conn(db)
    conn.execute(text("DELETE FROM provisions_fts WHERE document_id = :doc"), {"doc": document_id})
    result = conn.execute(
        text(
            """
            INSERT INTO provisions_fts (document_id, provision_ref, title, content)
            SELECT document_id, provision_ref, coalesce(title, ''), content
            FROM legal_provisions
            WHERE document_id = :doc
            ORDER BY id
            """
        ),
        {"doc": document_id},
    )
    return result.rowcount or 0


def read_db_metadata(db: Session | Connection) -> Dict[str, str]:
    """All db_metadata key/value pairs."""
    conn = _conn(db)
    rows = conn.execute(text("SELECT key, value FROM db_metadata")).all()
    return {key: value for key, value in rows}


def write_db_metadata(db: Session | Connection, values: Dict[str, str]) -> None:
    conn = _conn(db)
    for key, value in values.items():
        conn.execute(text("DELETE FROM db_metadata WHERE key = :key"), {"key": key})
        conn.execute(
            text("INSERT INTO db_metadata (key, value) VALUES (:key, :value)"),
            {"key": key, "value": value},
        )


def count_rows(db: Session | Connection, table: str) -> int:
    """Row count of a known table."""
    if table not in _COUNTABLE_TABLES:
        raise ValueError(f"Unknown table: {table}")
    conn = _conn(db)
    return int(conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar() or 0)
