"""Database configuration and session management for the local store."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def create_database_engine(database_url: str) -> Engine:
    """Return an engine for ``database_url``.

    SQLite connections are shared with the worker threads that run store calls,
    so the same-thread check is disabled for them.
    """

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    logger.debug("Creating database engine for %s", database_url.split("://", 1)[0])
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""

    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(engine: Engine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from chatpush.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Yield a session and close it afterwards."""

    session = session_factory()
    try:
        yield session
    finally:
        session.close()


__all__ = [
    "Base",
    "create_database_engine",
    "create_session_factory",
    "initialize_database",
    "session_scope",
]
