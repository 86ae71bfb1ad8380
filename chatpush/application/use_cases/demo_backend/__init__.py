"""Use cases served by the demo backend."""

from .devices import ANONYMOUS_USER, list_devices, register_device
from .dispatch import (
    DispatchResult,
    send_direct_notification,
    send_topic_notification,
    simulate_call,
)
from .history import clear_sent_notifications, list_sent_notifications

__all__ = [
    "ANONYMOUS_USER",
    "DispatchResult",
    "clear_sent_notifications",
    "list_devices",
    "list_sent_notifications",
    "register_device",
    "send_direct_notification",
    "send_topic_notification",
    "simulate_call",
]
