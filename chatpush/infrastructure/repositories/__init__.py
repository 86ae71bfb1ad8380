"""Repository implementations for infrastructure layer."""

from .device_repository import DeviceRepository
from .key_value_repository import KeyValueRepository
from .sent_notification_repository import SentNotificationRepository

__all__ = [
    "DeviceRepository",
    "KeyValueRepository",
    "SentNotificationRepository",
]
