"""Notification lifecycle use cases."""

from .lifecycle import (
    BADGE_COUNT_KEY,
    STORED_NOTIFICATIONS_KEY,
    TOKEN_KEY,
    NotificationLifecycleManager,
)
from .records import build_notification_record, count_unread, mark_all_read, new_record_id

__all__ = [
    "NotificationLifecycleManager",
    "STORED_NOTIFICATIONS_KEY",
    "TOKEN_KEY",
    "BADGE_COUNT_KEY",
    "build_notification_record",
    "count_unread",
    "mark_all_read",
    "new_record_id",
]
