"""Senders used by the demo backend to hand notifications to the push service."""

from __future__ import annotations

import logging
from typing import Mapping, Protocol

import firebase_admin
from anyio import to_thread
from firebase_admin import credentials, exceptions as firebase_exceptions, messaging

from chatpush.config import Settings
from chatpush.domain.errors import PushSendError
from chatpush.utils import current_epoch_millis

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "chatpush"


class PushSender(Protocol):
    """Hands a notification to the push delivery service."""

    async def send_to_token(
        self, token: str, *, title: str, body: str, data: Mapping[str, str]
    ) -> str: ...

    async def send_to_topic(
        self, topic: str, *, title: str, body: str, data: Mapping[str, str]
    ) -> str: ...


class SimulatedPushSender:
    """Log the notification and return a locally generated message id."""

    async def send_to_token(
        self, token: str, *, title: str, body: str, data: Mapping[str, str]
    ) -> str:
        logger.info("Simulating notification to %s...: %s", token[:10], title)
        return f"msg_{current_epoch_millis()}"

    async def send_to_topic(
        self, topic: str, *, title: str, body: str, data: Mapping[str, str]
    ) -> str:
        logger.info("Simulating topic notification to %s: %s", topic, title)
        return f"msg_{current_epoch_millis()}"


class FirebasePushSender:
    """Deliver notifications through Firebase Cloud Messaging."""

    def __init__(self, credentials_path: str) -> None:
        try:
            self._app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            cred = credentials.Certificate(credentials_path)
            self._app = firebase_admin.initialize_app(cred, name=FIREBASE_APP_NAME)

    async def send_to_token(
        self, token: str, *, title: str, body: str, data: Mapping[str, str]
    ) -> str:
        message = messaging.Message(
            token=token,
            notification=messaging.Notification(title=title, body=body),
            data=dict(data),
        )
        return await self._send(message, target=f"{token[:10]}...")

    async def send_to_topic(
        self, topic: str, *, title: str, body: str, data: Mapping[str, str]
    ) -> str:
        message = messaging.Message(
            topic=topic,
            notification=messaging.Notification(title=title, body=body),
            data=dict(data),
        )
        return await self._send(message, target=f"topic {topic}")

    async def _send(self, message: messaging.Message, *, target: str) -> str:
        try:
            response = await to_thread.run_sync(
                lambda: messaging.send(message, app=self._app)
            )
        except (firebase_exceptions.FirebaseError, ValueError) as exc:
            logger.error("Error sending notification to %s: %s", target, exc)
            raise PushSendError(str(exc)) from exc
        logger.info("Notification sent to %s: %s", target, response)
        return response


def build_push_sender(settings: Settings) -> PushSender:
    """Return the Firebase sender when credentials are configured."""

    if settings.firebase_credentials_path:
        return FirebasePushSender(settings.firebase_credentials_path)
    logger.info("Firebase credentials not configured; notifications are simulated")
    return SimulatedPushSender()


__all__ = [
    "PushSender",
    "SimulatedPushSender",
    "FirebasePushSender",
    "build_push_sender",
]
