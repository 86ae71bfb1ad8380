"""Pure helpers for building and querying notification records."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence

from chatpush.domain.entities import (
    DEFAULT_BODY,
    DEFAULT_TITLE,
    NotificationRecord,
    RemoteMessage,
)


def new_record_id() -> str:
    return uuid.uuid4().hex


def build_notification_record(
    message: RemoteMessage, *, record_id: str, timestamp: int
) -> NotificationRecord:
    """Create the unread record stored for ``message``.

    Title and body come from the display notification, then from the data
    payload, then from the defaults.
    """

    display = message.notification
    title = (display.title if display else None) or message.data.get("title") or DEFAULT_TITLE
    body = (display.body if display else None) or message.data.get("body") or DEFAULT_BODY
    return NotificationRecord(
        id=record_id,
        title=title,
        body=body,
        data=dict(message.data),
        timestamp=timestamp,
        read=False,
    )


def count_unread(records: Iterable[NotificationRecord]) -> int:
    return sum(1 for record in records if not record.read)


def mark_all_read(records: Sequence[NotificationRecord]) -> list[NotificationRecord]:
    return [record.mark_read() for record in records]


__all__ = [
    "new_record_id",
    "build_notification_record",
    "count_unread",
    "mark_all_read",
]
