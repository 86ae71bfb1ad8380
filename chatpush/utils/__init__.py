"""Utility helpers for reusable functionality."""

from .datetime import (
    current_epoch_millis,
    get_app_timezone,
    millis_to_datetime,
    now_in_app_timezone,
)
from .logging import configure_logging

__all__ = [
    "configure_logging",
    "current_epoch_millis",
    "get_app_timezone",
    "millis_to_datetime",
    "now_in_app_timezone",
]
