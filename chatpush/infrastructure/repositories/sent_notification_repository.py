"""Volatile history of notifications sent by the demo backend."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from chatpush.domain.entities import SentNotification

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class SentNotificationRepository:
    """Provide append, query and clear operations for :class:`SentNotification`."""

    def __init__(self) -> None:
        self._history: list[SentNotification] = []

    def add(self, notification: SentNotification) -> SentNotification:
        self._history.append(notification)
        return notification

    def list(
        self,
        *,
        limit: int | None = 50,
        notification_type: str | None = None,
    ) -> Sequence[SentNotification]:
        """Return the newest entries first, optionally filtered by type."""

        entries = self._history
        if notification_type:
            entries = [entry for entry in entries if entry.type == notification_type]
        # Insertion order breaks ties between equal timestamps.
        entries = sorted(
            reversed(entries), key=lambda entry: entry.sent_at or _EPOCH, reverse=True
        )
        if limit is not None:
            entries = entries[: max(limit, 0)]
        return entries

    def count(self) -> int:
        return len(self._history)

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""

        cleared = len(self._history)
        self._history = []
        return cleared


__all__ = ["SentNotificationRepository"]
