"""Database session management for the UAE law index."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..config.settings import settings


def create_db_engine(database_url: str) -> Engine:
    """Create an engine, making sure the parent directory of a SQLite file exists."""
    if database_url.startswith("sqlite:///") and not database_url.endswith(":memory:"):
        db_path = Path(database_url[len("sqlite:///"):])
        db_path.parent.mkdir(parents=True, exist_ok=True)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=False,  # Set to True for SQL debugging
    )


# Create database engine
engine = create_db_engine(settings.database_url)

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Yields:
        Session: SQLAlchemy database session

    Example:
        with get_db_session() as db:
            doc = db.get(LegalDocument, "fdl-45-2021")
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """
    Initialize database tables.

    Creates all ORM tables plus the FTS5 index (see setup_db_extras).
    """
    from .models import Base, setup_db_extras

    target = bind or engine
    Base.metadata.create_all(bind=target)
    setup_db_extras(target)


def drop_db(bind: Engine = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    from .models import Base, drop_db_extras

    target = bind or engine
    drop_db_extras(target)
    Base.metadata.drop_all(bind=target)
