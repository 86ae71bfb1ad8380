"""Pydantic models describing notification send and history payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel


class NotificationSendRequest(CamelModel):
    """Direct notification addressed to a single device token."""

    token: str | None = None
    title: str | None = None
    body: str | None = None
    data: dict[str, Any] | None = None


class TopicNotificationSendRequest(CamelModel):
    """Notification broadcast to a topic."""

    topic: str | None = None
    title: str | None = None
    body: str | None = None
    data: dict[str, Any] | None = None


class CallSimulationRequest(CamelModel):
    token: str | None = None
    caller_name: str | None = None
    call_type: str | None = None


class DisplayNotificationRead(CamelModel):
    title: str
    body: str


class PushResponseRead(CamelModel):
    """Outcome reported by the push delivery service."""

    message_id: str
    success: bool = True
    notification: DisplayNotificationRead
    data: dict[str, str] = Field(default_factory=dict)


class NotificationSendResponse(CamelModel):
    message: str
    response: PushResponseRead
    notification_id: str


class TopicNotificationSendResponse(CamelModel):
    message: str
    notification_id: str
    topic: str


class CallSimulationResponse(CamelModel):
    message: str
    call_id: str
    notification_id: str


class SentNotificationRead(CamelModel):
    """History entry for a notification sent by the backend."""

    id: str
    type: str
    title: str
    body: str
    data: dict[str, str] = Field(default_factory=dict)
    sent_at: datetime
    token: str | None = None
    topic: str | None = None
    message_id: str | None = None


class NotificationHistoryResponse(CamelModel):
    notifications: list[SentNotificationRead] = Field(default_factory=list)
    count: int
    total: int


class NotificationHistoryClearResponse(CamelModel):
    message: str
    cleared_count: int


__all__ = [
    "NotificationSendRequest",
    "TopicNotificationSendRequest",
    "CallSimulationRequest",
    "DisplayNotificationRead",
    "PushResponseRead",
    "NotificationSendResponse",
    "TopicNotificationSendResponse",
    "CallSimulationResponse",
    "SentNotificationRead",
    "NotificationHistoryResponse",
    "NotificationHistoryClearResponse",
]
