"""Database engine setup.

SQLite (WAL mode) is the default store, kept at
``{data_root}/.ariesbot/aries.db``. Any SQLAlchemy URL can be configured
instead; the registry only needs a pooled, thread-safe ``Engine``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from ariesbot.infrastructure.database.schema import metadata

DATA_DIRNAME = ".ariesbot"
DB_FILENAME = "aries.db"


def default_db_url(data_root: Path) -> str:
    """SQLite URL for the database under *data_root*."""
    return f"sqlite:///{data_root / DATA_DIRNAME / DB_FILENAME}"


def set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def create_db_engine(db_url: str) -> Engine:
    """Create an engine; SQLite connections get WAL mode and a busy timeout."""
    engine = create_engine(db_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", set_sqlite_pragma)
    return engine


def init_database(db_url: str) -> Engine:
    """Create the database (and its directory for SQLite) with all tables.

    Idempotent — safe to call on an existing database.

    Returns the engine ready for use.
    """
    engine = create_db_engine(db_url)
    database = engine.url.database
    if engine.dialect.name == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    metadata.create_all(engine)
    return engine
