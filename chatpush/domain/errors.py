"""Error types raised across the notification lifecycle."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for every notification lifecycle failure."""


class PermissionDeniedError(NotificationError):
    """The user or platform refused the notification permission."""


class TokenError(NotificationError):
    """The push delivery service could not issue a registration token."""


class SubscriptionError(NotificationError):
    """A topic subscription change was rejected by the push delivery service."""

    def __init__(self, topic: str, message: str) -> None:
        super().__init__(message)
        self.topic = topic


class StorageError(NotificationError):
    """The local key-value store could not be read or written."""


class BackendError(NotificationError):
    """The demo backend rejected a request or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PushSendError(NotificationError):
    """A notification could not be handed to the push delivery service."""


__all__ = [
    "NotificationError",
    "PermissionDeniedError",
    "TokenError",
    "SubscriptionError",
    "StorageError",
    "BackendError",
    "PushSendError",
]
