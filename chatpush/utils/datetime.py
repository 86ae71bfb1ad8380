"""Helpers for working with timestamps."""

from __future__ import annotations

import re
import time
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chatpush.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved from the ``APP_TIMEZONE`` environment variable. Values
    such as ``UTC+05:30`` are accepted as fixed offsets; anything else that cannot
    be resolved falls back to UTC.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def current_epoch_millis() -> int:
    """Return the current wall clock time as integer epoch milliseconds."""

    return time.time_ns() // 1_000_000


def millis_to_datetime(value: int) -> datetime:
    """Convert epoch milliseconds into an aware datetime in the app timezone."""

    return datetime.fromtimestamp(value / 1000, tz=get_app_timezone())


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
