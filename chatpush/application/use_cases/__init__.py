"""Aggregate application use cases."""

from .notifications import NotificationLifecycleManager

__all__ = ["NotificationLifecycleManager"]
