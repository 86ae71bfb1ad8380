"""Use cases over the demo backend's sent-notification history."""

from __future__ import annotations

from collections.abc import Sequence

from chatpush.domain.entities import SentNotification
from chatpush.infrastructure.repositories import SentNotificationRepository


def list_sent_notifications(
    repository: SentNotificationRepository,
    *,
    limit: int,
    notification_type: str | None = None,
) -> Sequence[SentNotification]:
    """Return the newest ``limit`` entries, optionally filtered by type."""

    if limit < 0:
        raise ValueError("limit must not be negative")
    return repository.list(limit=limit, notification_type=notification_type)


def clear_sent_notifications(repository: SentNotificationRepository) -> int:
    return repository.clear()
