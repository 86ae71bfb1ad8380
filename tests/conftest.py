"""Shared fixtures for the notification lifecycle tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``chatpush`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chatpush.application.use_cases.notifications import NotificationLifecycleManager
from chatpush.infrastructure.notifications import NotificationEvent, NotificationEventBus
from chatpush.infrastructure.push import LocalPushDeliveryService
from chatpush.infrastructure.storage import InMemoryKeyValueStore


@pytest.fixture
def anyio_backend():
    return "asyncio"


class RecordingBadge:
    """Badge presenter remembering every count it was asked to show."""

    def __init__(self) -> None:
        self.counts: list[int] = []

    async def set_badge_count(self, count: int) -> None:
        self.counts.append(count)


class RecordingRegistrar:
    """Device registrar remembering every token it received."""

    def __init__(self) -> None:
        self.tokens: list[str] = []

    async def register_device(self, token, *, user_id=None, device_info=None):
        self.tokens.append(token)
        return {"message": "Device registered successfully"}


class EventRecorder:
    """Collect the payloads emitted for every notification event."""

    def __init__(self, bus: NotificationEventBus) -> None:
        self.payloads: dict[NotificationEvent, list] = {event: [] for event in NotificationEvent}
        for event in NotificationEvent:
            bus.subscribe(event, self.payloads[event].append)

    def __getitem__(self, event: NotificationEvent) -> list:
        return self.payloads[event]


@pytest.fixture
def delivery() -> LocalPushDeliveryService:
    return LocalPushDeliveryService(token="token-1234567890abcdef")


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def badge() -> RecordingBadge:
    return RecordingBadge()


@pytest.fixture
def registrar() -> RecordingRegistrar:
    return RecordingRegistrar()


@pytest.fixture
def manager(delivery, store, badge, registrar) -> NotificationLifecycleManager:
    timestamps = iter(range(1_000, 1_000_000, 1_000))
    return NotificationLifecycleManager(
        delivery,
        store,
        badge=badge,
        registrar=registrar,
        clock=lambda: next(timestamps),
    )


@pytest.fixture
def events(manager) -> EventRecorder:
    return EventRecorder(manager.events)
