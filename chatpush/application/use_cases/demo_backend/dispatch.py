"""Use cases that send notifications from the demo backend."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Mapping

from chatpush.domain.entities import (
    CALL_TYPE_VOICE,
    DEFAULT_BODY,
    DEFAULT_TITLE,
    SENT_TYPE_CALL,
    SENT_TYPE_DIRECT,
    SENT_TYPE_TOPIC,
    UNKNOWN_CALLER,
    SentNotification,
    normalize_data,
)
from chatpush.infrastructure.push import PushSender
from chatpush.infrastructure.repositories import SentNotificationRepository
from chatpush.utils import current_epoch_millis, now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """A history entry together with the id returned by the push service."""

    notification: SentNotification
    message_id: str


def _required(value: str | None, field_name: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise ValueError(f"{field_name} is required")
    return normalized


def _new_notification_id() -> str:
    return uuid.uuid4().hex


async def send_direct_notification(
    repository: SentNotificationRepository,
    sender: PushSender,
    *,
    token: str | None,
    title: str | None = None,
    body: str | None = None,
    data: Mapping[str, Any] | None = None,
) -> DispatchResult:
    """Send a notification to a single device token and record it."""

    token = _required(token, "Token")
    notification = SentNotification(
        id=_new_notification_id(),
        type=SENT_TYPE_DIRECT,
        title=title or DEFAULT_TITLE,
        body=body or DEFAULT_BODY,
        data=normalize_data(data),
        sent_at=now_in_app_timezone(),
        token=token,
    )
    message_id = await sender.send_to_token(
        token, title=notification.title, body=notification.body, data=notification.data
    )
    notification.message_id = message_id
    repository.add(notification)
    logger.info("Direct notification %s sent as %s", notification.id, message_id)
    return DispatchResult(notification=notification, message_id=message_id)


async def send_topic_notification(
    repository: SentNotificationRepository,
    sender: PushSender,
    *,
    topic: str | None,
    title: str | None = None,
    body: str | None = None,
    data: Mapping[str, Any] | None = None,
) -> DispatchResult:
    """Broadcast a notification to every device subscribed to ``topic``."""

    topic = _required(topic, "Topic")
    notification = SentNotification(
        id=_new_notification_id(),
        type=SENT_TYPE_TOPIC,
        title=title or DEFAULT_TITLE,
        body=body or DEFAULT_BODY,
        data=normalize_data(data),
        sent_at=now_in_app_timezone(),
        topic=topic,
    )
    message_id = await sender.send_to_topic(
        topic, title=notification.title, body=notification.body, data=notification.data
    )
    notification.message_id = message_id
    repository.add(notification)
    logger.info("Topic notification %s sent to %s", notification.id, topic)
    return DispatchResult(notification=notification, message_id=message_id)


async def simulate_call(
    repository: SentNotificationRepository,
    sender: PushSender,
    *,
    token: str | None,
    caller_name: str | None = None,
    call_type: str | None = None,
) -> DispatchResult:
    """Send an incoming-call notification that deep-links to the caller's chat."""

    token = _required(token, "Token")
    caller = caller_name or UNKNOWN_CALLER
    call_type = call_type or CALL_TYPE_VOICE
    call_id = f"call_{current_epoch_millis()}"
    notification = SentNotification(
        id=_new_notification_id(),
        type=SENT_TYPE_CALL,
        title=f"{call_type.capitalize()} call",
        body=f"Incoming {call_type.lower()} call from {caller}",
        data={
            "type": SENT_TYPE_CALL,
            "callType": call_type,
            "callerName": caller,
            "callId": call_id,
            "chatId": f"chat_{(caller_name or 'unknown')}",
            "sender": caller,
        },
        sent_at=now_in_app_timezone(),
        token=token,
    )
    message_id = await sender.send_to_token(
        token, title=notification.title, body=notification.body, data=notification.data
    )
    notification.message_id = message_id
    repository.add(notification)
    logger.info("Call notification %s sent for %s", call_id, caller)
    return DispatchResult(notification=notification, message_id=message_id)
