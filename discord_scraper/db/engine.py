"""Database engine configuration.

Provides centralized engine and session management for the SQLite store.

Usage:
    from discord_scraper.db.engine import get_engine, get_session_factory

    engine = get_engine("./data/messages.db")
    Session = get_session_factory("./data/messages.db")
    with Session() as session:
        ...
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker


# Engine cache: db_path -> engine
_engine_cache: dict[str, Engine] = {}


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """Turn on SQLite foreign key enforcement for every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def database_url(db_path: str | Path) -> str:
    """Build a SQLAlchemy URL for a SQLite file path."""
    return f"sqlite:///{Path(db_path)}"


def get_engine(db_path: str | Path) -> Engine:
    """Get or create the engine for a SQLite store file.

    Parent directories of the file are created if missing. Engines are
    cached by path so the process holds a single handle per store.

    Args:
        db_path: Path to the SQLite file.

    Returns:
        Engine instance (cached).
    """
    key = str(db_path)
    if key not in _engine_cache:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(database_url(db_path), echo=False)
        event.listen(engine, "connect", _enable_foreign_keys)
        _engine_cache[key] = engine

    return _engine_cache[key]


@lru_cache(maxsize=8)
def get_session_factory(db_path: str) -> sessionmaker[Session]:
    """Get a session factory for the given store file.

    Args:
        db_path: Path to the SQLite file.

    Returns:
        sessionmaker instance for creating sessions.
    """
    engine = get_engine(db_path)
    return sessionmaker(bind=engine, expire_on_commit=False)


def dispose_engines() -> None:
    """Dispose all cached engines.

    Call this during shutdown (and between tests) to close all
    database connections.
    """
    for engine in _engine_cache.values():
        engine.dispose()
    _engine_cache.clear()
    get_session_factory.cache_clear()
