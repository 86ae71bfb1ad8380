"""In-process notification helpers for the infrastructure layer."""

from .events import Listener, NotificationEvent, NotificationEventBus, Subscription
from .serialization import (
    decode_notification_log,
    deserialize_notification,
    encode_notification_log,
    serialize_notification,
)

__all__ = [
    "Listener",
    "NotificationEvent",
    "NotificationEventBus",
    "Subscription",
    "decode_notification_log",
    "deserialize_notification",
    "encode_notification_log",
    "serialize_notification",
]
