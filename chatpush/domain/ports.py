"""Protocols for the collaborators the lifecycle manager depends on."""

from __future__ import annotations

from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Protocol

from chatpush.domain.entities import RemoteMessage

MessageHandler = Callable[[RemoteMessage], Awaitable[None]]
TokenHandler = Callable[[str], Awaitable[None]]
Unsubscribe = Callable[[], None]


class PermissionStatus(str, Enum):
    """Outcome of a notification permission prompt."""

    GRANTED = "granted"
    PROVISIONAL = "provisional"
    DENIED = "denied"
    NOT_APPLICABLE = "not_applicable"

    @property
    def allows_delivery(self) -> bool:
        return self is not PermissionStatus.DENIED


class PushDeliveryService(Protocol):
    """Capability offered by the platform push SDK (e.g. Firebase Messaging)."""

    async def get_token(self) -> str: ...

    async def request_permission(self) -> PermissionStatus:
        """Return the permission outcome; platforms that block the prompt raise
        :class:`~chatpush.domain.errors.PermissionDeniedError`."""
        ...

    async def subscribe_to_topic(self, topic: str) -> None: ...

    async def unsubscribe_from_topic(self, topic: str) -> None: ...

    def set_background_handler(self, handler: MessageHandler | None) -> None: ...

    def on_message(self, handler: MessageHandler) -> Unsubscribe: ...

    def on_notification_opened(self, handler: MessageHandler) -> Unsubscribe: ...

    def on_token_refresh(self, handler: TokenHandler) -> Unsubscribe: ...

    async def get_initial_notification(self) -> RemoteMessage | None: ...


class KeyValueStore(Protocol):
    """String key-value persistence; failures raise ``StorageError``."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...


class BadgePresenter(Protocol):
    """Shows the unread counter on the application icon."""

    async def set_badge_count(self, count: int) -> None: ...


class DeviceRegistrar(Protocol):
    """Announces a registration token to the application server."""

    async def register_device(
        self,
        token: str,
        *,
        user_id: str | None = None,
        device_info: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]: ...


__all__ = [
    "BadgePresenter",
    "DeviceRegistrar",
    "KeyValueStore",
    "MessageHandler",
    "PermissionStatus",
    "PushDeliveryService",
    "TokenHandler",
    "Unsubscribe",
]
