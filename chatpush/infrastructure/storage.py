"""Key-value stores used to persist the notification log and cached token."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from anyio import to_thread
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from chatpush.domain.errors import StorageError
from chatpush.infrastructure.database import (
    create_database_engine,
    create_session_factory,
    initialize_database,
    session_scope,
)
from chatpush.infrastructure.repositories import KeyValueRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryKeyValueStore:
    """Process-local store; contents are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored value."""

        return dict(self._values)


class DatabaseKeyValueStore:
    """Store backed by the ``key_value_entry`` table.

    SQLAlchemy calls are blocking, so each operation runs in a worker thread.
    Database errors surface as :class:`StorageError`.
    """

    def __init__(
        self, session_factory: sessionmaker[Session], engine: Engine | None = None
    ) -> None:
        self._session_factory = session_factory
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "DatabaseKeyValueStore":
        """Create the tables for ``database_url`` and return a store bound to it."""

        engine = create_database_engine(database_url)
        try:
            initialize_database(engine)
        except SQLAlchemyError as exc:
            engine.dispose()
            raise StorageError(f"Could not initialise key-value store: {exc}") from exc
        return cls(create_session_factory(engine), engine)

    def close(self) -> None:
        """Dispose the engine created by :meth:`from_url`."""

        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    async def get(self, key: str) -> str | None:
        return await self._run(lambda repository: repository.get(key), "read", key)

    async def set(self, key: str, value: str) -> None:
        await self._run(lambda repository: repository.set(key, value), "write", key)

    async def remove(self, key: str) -> None:
        await self._run(lambda repository: repository.remove(key), "remove", key)

    async def _run(
        self, operation: Callable[[KeyValueRepository], T], action: str, key: str
    ) -> T:
        def _call() -> T:
            with session_scope(self._session_factory) as session:
                return operation(KeyValueRepository(session))

        try:
            return await to_thread.run_sync(_call)
        except SQLAlchemyError as exc:
            logger.warning("Key-value store %s failed for %s: %s", action, key, exc)
            raise StorageError(f"Could not {action} key '{key}'") from exc


__all__ = ["InMemoryKeyValueStore", "DatabaseKeyValueStore"]
