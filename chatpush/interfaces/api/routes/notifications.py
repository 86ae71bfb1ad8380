"""Routes that send notifications and expose the sent history."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from chatpush.application.use_cases.demo_backend import (
    clear_sent_notifications,
    list_sent_notifications,
    send_direct_notification,
    send_topic_notification,
    simulate_call,
)
from chatpush.config import Settings
from chatpush.domain.entities import SentNotification
from chatpush.domain.errors import PushSendError
from chatpush.infrastructure.push import PushSender
from chatpush.infrastructure.repositories import SentNotificationRepository
from chatpush.interfaces.api.dependencies import (
    get_app_settings,
    get_history_repository,
    get_push_sender,
)
from chatpush.interfaces.api.schemas import (
    CallSimulationRequest,
    CallSimulationResponse,
    DisplayNotificationRead,
    NotificationHistoryClearResponse,
    NotificationHistoryResponse,
    NotificationSendRequest,
    NotificationSendResponse,
    PushResponseRead,
    SentNotificationRead,
    TopicNotificationSendRequest,
    TopicNotificationSendResponse,
)

router = APIRouter(tags=["notifications"])
logger = logging.getLogger(__name__)


def _to_read_model(notification: SentNotification) -> SentNotificationRead:
    return SentNotificationRead(
        id=notification.id,
        type=notification.type,
        title=notification.title,
        body=notification.body,
        data=notification.data,
        sent_at=notification.sent_at,
        token=notification.token,
        topic=notification.topic,
        message_id=notification.message_id,
    )


def _dispatch_error(exc: Exception) -> HTTPException:
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    logger.warning("Push delivery rejected the notification: %s", exc)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.post("/send-notification", response_model=NotificationSendResponse)
async def send_notification(
    payload: NotificationSendRequest,
    repository: SentNotificationRepository = Depends(get_history_repository),
    sender: PushSender = Depends(get_push_sender),
) -> NotificationSendResponse:
    """Send a notification to a specific device token."""

    try:
        result = await send_direct_notification(
            repository,
            sender,
            token=payload.token,
            title=payload.title,
            body=payload.body,
            data=payload.data,
        )
    except (ValueError, PushSendError) as exc:
        raise _dispatch_error(exc) from exc

    notification = result.notification
    return NotificationSendResponse(
        message="Notification sent successfully",
        response=PushResponseRead(
            message_id=result.message_id,
            success=True,
            notification=DisplayNotificationRead(
                title=notification.title, body=notification.body
            ),
            data=notification.data,
        ),
        notification_id=notification.id,
    )


@router.post("/send-topic-notification", response_model=TopicNotificationSendResponse)
async def send_topic_notification_endpoint(
    payload: TopicNotificationSendRequest,
    repository: SentNotificationRepository = Depends(get_history_repository),
    sender: PushSender = Depends(get_push_sender),
) -> TopicNotificationSendResponse:
    """Broadcast a notification to a topic."""

    try:
        result = await send_topic_notification(
            repository,
            sender,
            topic=payload.topic,
            title=payload.title,
            body=payload.body,
            data=payload.data,
        )
    except (ValueError, PushSendError) as exc:
        raise _dispatch_error(exc) from exc

    return TopicNotificationSendResponse(
        message="Topic notification sent successfully",
        notification_id=result.notification.id,
        topic=result.notification.topic or "",
    )


@router.post("/simulate-call", response_model=CallSimulationResponse)
async def simulate_call_endpoint(
    payload: CallSimulationRequest,
    repository: SentNotificationRepository = Depends(get_history_repository),
    sender: PushSender = Depends(get_push_sender),
) -> CallSimulationResponse:
    """Send an incoming-call notification."""

    try:
        result = await simulate_call(
            repository,
            sender,
            token=payload.token,
            caller_name=payload.caller_name,
            call_type=payload.call_type,
        )
    except (ValueError, PushSendError) as exc:
        raise _dispatch_error(exc) from exc

    return CallSimulationResponse(
        message="Call notification sent successfully",
        call_id=result.notification.data["callId"],
        notification_id=result.notification.id,
    )


@router.get("/notifications", response_model=NotificationHistoryResponse)
def list_notifications(
    limit: int | None = Query(None, ge=0, description="Maximum number of entries"),
    notification_type: str | None = Query(
        None, alias="type", description="Only entries of this type (direct, topic, call)"
    ),
    repository: SentNotificationRepository = Depends(get_history_repository),
    settings: Settings = Depends(get_app_settings),
) -> NotificationHistoryResponse:
    """Return the sent history, newest first."""

    effective_limit = settings.history_default_limit if limit is None else limit
    entries = list_sent_notifications(
        repository, limit=effective_limit, notification_type=notification_type
    )
    notifications = [_to_read_model(entry) for entry in entries]
    return NotificationHistoryResponse(
        notifications=notifications,
        count=len(notifications),
        total=repository.count(),
    )


@router.delete("/notifications", response_model=NotificationHistoryClearResponse)
def clear_notifications(
    repository: SentNotificationRepository = Depends(get_history_repository),
) -> NotificationHistoryClearResponse:
    """Forget every sent notification."""

    cleared = clear_sent_notifications(repository)
    return NotificationHistoryClearResponse(
        message="Notification history cleared", cleared_count=cleared
    )
