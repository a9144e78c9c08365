"""
Database engine, session factory and declarative base.

All persisted entities subclass Base. Sessions are handed to
repositories through the get_session dependency, which commits on
success and rolls back when the request fails.
"""

import logging
from collections.abc import Iterator
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from aiblog.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all persisted entities."""


class Database:
    """Owns the engine and session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.engine = _build_engine(url, echo)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_all(self) -> None:
        """Create tables for every entity registered on Base."""
        Base.metadata.create_all(self.engine)
        logger.info("Database schema ready: %s", self.engine.url.render_as_string(hide_password=True))

    def session(self) -> Session:
        return self._session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def _build_engine(url: str, echo: bool) -> Engine:
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo, pool_pre_ping=True)


_database: Optional[Database] = None


def init_database(settings: Settings) -> Database:
    """Create the process-wide Database and its schema."""
    global _database
    if _database is not None and _database.url != settings.database_url:
        _database.dispose()
        _database = None
    if _database is None:
        _database = Database(settings.database_url, echo=settings.database_echo)
    _database.create_all()
    return _database


def get_database() -> Database:
    if _database is None:
        raise RuntimeError("Database is not initialized; call init_database() first")
    return _database


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding a transactional session."""
    session = get_database().session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
