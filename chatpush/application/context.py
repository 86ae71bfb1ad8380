"""Explicit wiring of the lifecycle manager and its collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chatpush.application.use_cases.notifications import NotificationLifecycleManager
from chatpush.config import Settings, get_settings
from chatpush.domain.ports import BadgePresenter, KeyValueStore, PushDeliveryService
from chatpush.infrastructure.backend_client import DemoBackendClient
from chatpush.infrastructure.notifications import NotificationEventBus
from chatpush.infrastructure.storage import DatabaseKeyValueStore, InMemoryKeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class NotificationContext:
    """Objects shared by the presentation layer for the life of the process.

    Build it once at start-up with :func:`build_notification_context`, call
    :meth:`start` to register for push delivery and :meth:`close` on shutdown.
    """

    manager: NotificationLifecycleManager
    events: NotificationEventBus
    store: KeyValueStore
    delivery: PushDeliveryService
    backend_client: DemoBackendClient | None = None
    token: str | None = field(default=None, init=False)

    async def start(self) -> str:
        self.token = await self.manager.initialize()
        return self.token

    async def close(self) -> None:
        self.manager.close()
        if isinstance(self.store, DatabaseKeyValueStore):
            self.store.close()
        if self.backend_client is not None:
            await self.backend_client.aclose()


def build_store(settings: Settings) -> KeyValueStore:
    """Return the key-value store selected by ``settings.storage_backend``."""

    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return DatabaseKeyValueStore.from_url(settings.database_url)


def build_notification_context(
    delivery: PushDeliveryService,
    *,
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    badge: BadgePresenter | None = None,
) -> NotificationContext:
    """Assemble a :class:`NotificationContext` around ``delivery``."""

    settings = settings or get_settings()
    store = store if store is not None else build_store(settings)
    events = NotificationEventBus()

    backend_client = None
    if settings.backend_url:
        backend_client = DemoBackendClient(
            settings.backend_url, timeout=settings.backend_timeout_seconds
        )
        logger.info("Device tokens will be registered with %s", settings.backend_url)

    manager = NotificationLifecycleManager(
        delivery,
        store,
        events,
        badge=badge,
        registrar=backend_client,
    )
    return NotificationContext(
        manager=manager,
        events=events,
        store=store,
        delivery=delivery,
        backend_client=backend_client,
    )


__all__ = ["NotificationContext", "build_notification_context", "build_store"]
