"""Serialization of notification records for the local log."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from chatpush.domain.entities import NotificationRecord, normalize_data
from chatpush.domain.errors import StorageError

logger = logging.getLogger(__name__)


def serialize_notification(record: NotificationRecord) -> dict[str, Any]:
    """Return the JSON-serializable representation of ``record``."""

    return {
        "id": record.id,
        "title": record.title,
        "body": record.body,
        "data": dict(record.data),
        "timestamp": record.timestamp,
        "read": record.read,
    }


def deserialize_notification(raw: Any) -> NotificationRecord | None:
    """Build a record from ``raw`` or return ``None`` when it is malformed."""

    if not isinstance(raw, dict):
        return None
    record_id = raw.get("id")
    if not isinstance(record_id, str) or not record_id:
        return None
    try:
        timestamp = int(raw.get("timestamp") or 0)
    except (TypeError, ValueError):
        return None
    data = raw.get("data")
    return NotificationRecord(
        id=record_id,
        title=str(raw.get("title") or ""),
        body=str(raw.get("body") or ""),
        data=normalize_data(data if isinstance(data, dict) else None),
        timestamp=timestamp,
        read=raw.get("read") is True,
    )


def encode_notification_log(records: Iterable[NotificationRecord]) -> str:
    return json.dumps([serialize_notification(record) for record in records])


def decode_notification_log(raw: str | None) -> list[NotificationRecord]:
    """Parse a stored log, skipping malformed entries.

    Raises :class:`StorageError` when ``raw`` is not a JSON array.
    """

    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageError("Stored notification log is not valid JSON") from exc
    if not isinstance(parsed, list):
        raise StorageError("Stored notification log is not a list")

    records: list[NotificationRecord] = []
    for index, item in enumerate(parsed):
        record = deserialize_notification(item)
        if record is None:
            logger.warning("Skipping malformed stored notification at position %s", index)
            continue
        records.append(record)
    return records


__all__ = [
    "serialize_notification",
    "deserialize_notification",
    "encode_notification_log",
    "decode_notification_log",
]
