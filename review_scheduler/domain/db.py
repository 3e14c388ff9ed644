"""Database initialization and utilities."""

from __future__ import annotations

from typing import List

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import Session, sessionmaker

from review_scheduler.config import SchedulerConfig

from .models import Base

DEFAULT_DB_URL = SchedulerConfig().db_url


def create_db_engine(db_url: str | None = None, echo: bool = False):
    """Create SQLAlchemy engine; None uses the configured default URL."""
    return create_engine(db_url or DEFAULT_DB_URL, echo=echo)


def init_database(db_url: str | None = None) -> List[str]:
    """
    Create any missing tables.

    Returns:
        Names of the tables present after initialization
    """
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    tables = sorted(inspect(engine).get_table_names())
    print(f"[INFO] Database initialized: {db_url or DEFAULT_DB_URL} ({', '.join(tables)})")
    return tables


def get_session(db_url: str | None = None) -> Session:
    """Get a new database session."""
    SessionFactory = sessionmaker(bind=create_db_engine(db_url))
    return SessionFactory()
