"""SQLAlchemy database setup for Knitting Tracker."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from knittracker.utils import get_data_dir

if TYPE_CHECKING:
    import sqlite3

#: The default database name.
DEFAULT_DB_NAME: Final[str] = "knittracker.db"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def get_db_path() -> Path:
    """
    Get the path to the application database, inside :func:`get_data_dir`.

    Returns:
        Path to the database file

    """
    return get_data_dir() / DEFAULT_DB_NAME


def create_engine_with_path(db_path: Path | None = None) -> Engine:
    """
    Create SQLAlchemy engine with proper SQLite settings.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        SQLAlchemy engine

    """
    if db_path is None:
        db_path = get_db_path()

    db_path.touch(exist_ok=True)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(
        dbapi_conn: sqlite3.Connection | Any, _connection_record: Any
    ) -> None:
        """Set SQLite pragmas on connection."""
        cursor = cast("sqlite3.Cursor", dbapi_conn.cursor())
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """
    Create the tables for all models and return a session factory bound to
    ``engine``.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Session factory

    """
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
