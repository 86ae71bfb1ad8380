"""Domain entities kept by the demo backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

SENT_TYPE_DIRECT = "direct"
SENT_TYPE_TOPIC = "topic"
SENT_TYPE_CALL = "call"

DEVICE_ID_PREFIX_LENGTH = 10


def mask_token(token: str) -> str:
    """Return the shortened identifier shown for a registration token."""

    return f"{token[:DEVICE_ID_PREFIX_LENGTH]}..."


@dataclass
class RegisteredDevice:
    """A registration token announced by a client."""

    token: str
    user_id: str
    device_info: dict[str, Any] = field(default_factory=dict)
    registered_at: datetime | None = None

    @property
    def device_id(self) -> str:
        return mask_token(self.token)


@dataclass
class SentNotification:
    """A notification the demo backend handed to the push delivery service."""

    id: str
    type: str
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)
    sent_at: datetime | None = None
    token: str | None = None
    topic: str | None = None
    message_id: str | None = None


__all__ = [
    "RegisteredDevice",
    "SentNotification",
    "SENT_TYPE_DIRECT",
    "SENT_TYPE_TOPIC",
    "SENT_TYPE_CALL",
    "mask_token",
]
