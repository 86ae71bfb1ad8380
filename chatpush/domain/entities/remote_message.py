"""Inbound push message as handed over by the push delivery service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from .payload import normalize_data


class DeliveryState(str, Enum):
    """Application state in which a push message reached the device."""

    FOREGROUND = "foreground"
    BACKGROUND = "background"
    QUIT = "quit"


@dataclass(frozen=True)
class DisplayNotification:
    """The part of a push message the platform can render on its own."""

    title: str | None = None
    body: str | None = None


@dataclass(frozen=True)
class RemoteMessage:
    """A push message with its optional display part and data payload."""

    message_id: str | None = None
    sender_id: str | None = None
    notification: DisplayNotification | None = None
    data: dict[str, str] = field(default_factory=dict)
    sent_time: int | None = None

    @property
    def has_data(self) -> bool:
        return bool(self.data)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "RemoteMessage":
        """Build a message from the camelCase wire form used by push SDKs."""

        notification_raw = raw.get("notification")
        notification = None
        if isinstance(notification_raw, Mapping):
            notification = DisplayNotification(
                title=notification_raw.get("title"),
                body=notification_raw.get("body"),
            )
        data_raw = raw.get("data")
        return cls(
            message_id=raw.get("messageId"),
            sender_id=raw.get("from"),
            notification=notification,
            data=normalize_data(data_raw if isinstance(data_raw, Mapping) else None),
            sent_time=_parse_sent_time(raw.get("sentTime")),
        )


def _parse_sent_time(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


__all__ = ["DeliveryState", "DisplayNotification", "RemoteMessage"]
