"""In-process push delivery service mirroring the platform messaging SDK."""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from chatpush.domain.entities import DeliveryState, RemoteMessage
from chatpush.domain.ports import MessageHandler, PermissionStatus, TokenHandler, Unsubscribe

logger = logging.getLogger(__name__)


def _generate_token() -> str:
    return f"local-{uuid.uuid4().hex}"


class LocalPushDeliveryService:
    """Deliver push messages inside the current process.

    Besides the :class:`~chatpush.domain.ports.PushDeliveryService` surface it
    exposes driver methods (:meth:`deliver`, :meth:`open_notification`,
    :meth:`refresh_token`) that play the part of the platform when running the
    demo or tests. ``permission_error``, ``token_error`` and
    ``subscription_error`` make the matching calls fail with the given exception.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        permission: PermissionStatus = PermissionStatus.GRANTED,
        token_factory: Callable[[], str] = _generate_token,
    ) -> None:
        self._token = token
        self._token_factory = token_factory
        self.permission = permission
        self.permission_error: Exception | None = None
        self.token_error: Exception | None = None
        self.subscription_error: Exception | None = None
        self.topics: set[str] = set()
        self._background_handler: MessageHandler | None = None
        self._message_handlers: list[MessageHandler] = []
        self._opened_handlers: list[MessageHandler] = []
        self._token_handlers: list[TokenHandler] = []
        self._initial_notification: RemoteMessage | None = None

    async def get_token(self) -> str:
        if self.token_error is not None:
            raise self.token_error
        if self._token is None:
            self._token = self._token_factory()
        return self._token

    async def request_permission(self) -> PermissionStatus:
        if self.permission_error is not None:
            raise self.permission_error
        return self.permission

    async def subscribe_to_topic(self, topic: str) -> None:
        if self.subscription_error is not None:
            raise self.subscription_error
        self.topics.add(topic)

    async def unsubscribe_from_topic(self, topic: str) -> None:
        if self.subscription_error is not None:
            raise self.subscription_error
        self.topics.discard(topic)

    def set_background_handler(self, handler: MessageHandler | None) -> None:
        self._background_handler = handler

    def on_message(self, handler: MessageHandler) -> Unsubscribe:
        return self._register(self._message_handlers, handler)

    def on_notification_opened(self, handler: MessageHandler) -> Unsubscribe:
        return self._register(self._opened_handlers, handler)

    def on_token_refresh(self, handler: TokenHandler) -> Unsubscribe:
        return self._register(self._token_handlers, handler)

    async def get_initial_notification(self) -> RemoteMessage | None:
        """Return the launch notification once; later calls return ``None``."""

        message, self._initial_notification = self._initial_notification, None
        return message

    def set_initial_notification(self, message: RemoteMessage | None) -> None:
        self._initial_notification = message

    @property
    def has_background_handler(self) -> bool:
        return self._background_handler is not None

    def handler_count(self) -> int:
        return (
            len(self._message_handlers)
            + len(self._opened_handlers)
            + len(self._token_handlers)
            + int(self._background_handler is not None)
        )

    async def deliver(
        self, message: RemoteMessage, state: DeliveryState = DeliveryState.FOREGROUND
    ) -> int:
        """Route ``message`` the way the platform does for ``state``.

        Foreground messages go to every ``on_message`` handler. Background
        messages go to the background handler. A message arriving while the app
        is not running runs the background handler (when it carries data) and
        becomes the initial notification for the next launch. Returns the number
        of handlers invoked.
        """

        if state is DeliveryState.FOREGROUND:
            handlers = list(self._message_handlers)
            for handler in handlers:
                await handler(message)
            return len(handlers)

        invoked = 0
        if state is DeliveryState.QUIT:
            self._initial_notification = message
            if not message.has_data:
                return invoked

        if self._background_handler is not None:
            await self._background_handler(message)
            invoked += 1
        else:
            logger.debug("No background handler installed; message %s dropped", message.message_id)
        return invoked

    async def open_notification(self, message: RemoteMessage) -> int:
        """Simulate the user tapping ``message`` while the app is in background."""

        handlers = list(self._opened_handlers)
        for handler in handlers:
            await handler(message)
        return len(handlers)

    async def refresh_token(self, token: str | None = None) -> str:
        """Issue a new token and notify the refresh handlers."""

        self._token = token or self._token_factory()
        for handler in list(self._token_handlers):
            await handler(self._token)
        return self._token

    @staticmethod
    def _register(handlers: list, handler) -> Unsubscribe:
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe


__all__ = ["LocalPushDeliveryService"]
