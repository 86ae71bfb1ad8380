"""Domain entities exposed by the application."""

from .device import (
    SENT_TYPE_CALL,
    SENT_TYPE_DIRECT,
    SENT_TYPE_TOPIC,
    RegisteredDevice,
    SentNotification,
    mask_token,
)
from .notification import DEFAULT_BODY, DEFAULT_TITLE, NotificationRecord
from .payload import (
    CALL_TYPE_VOICE,
    UNKNOWN_CALLER,
    CallPayload,
    ChatMessagePayload,
    ChatNavigation,
    GenericPayload,
    NotificationKind,
    NotificationPayload,
    navigation_for,
    normalize_data,
    parse_notification_payload,
)
from .remote_message import DeliveryState, DisplayNotification, RemoteMessage

__all__ = [
    "CALL_TYPE_VOICE",
    "UNKNOWN_CALLER",
    "CallPayload",
    "ChatMessagePayload",
    "ChatNavigation",
    "DEFAULT_BODY",
    "DEFAULT_TITLE",
    "DeliveryState",
    "DisplayNotification",
    "GenericPayload",
    "NotificationKind",
    "NotificationPayload",
    "NotificationRecord",
    "RegisteredDevice",
    "RemoteMessage",
    "SENT_TYPE_CALL",
    "SENT_TYPE_DIRECT",
    "SENT_TYPE_TOPIC",
    "SentNotification",
    "mask_token",
    "navigation_for",
    "normalize_data",
    "parse_notification_payload",
]
