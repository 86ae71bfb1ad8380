"""Domain entity representing a locally stored notification."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

DEFAULT_TITLE = "New Message"
DEFAULT_BODY = "You have a new message"


@dataclass(frozen=True)
class NotificationRecord:
    """A push message as it was received and appended to the local log."""

    id: str
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)
    timestamp: int = 0
    read: bool = False

    def mark_read(self) -> "NotificationRecord":
        """Return a copy of the record flagged as read."""

        if self.read:
            return self
        return replace(self, read=True)


__all__ = ["NotificationRecord", "DEFAULT_TITLE", "DEFAULT_BODY"]
