"""Notification lifecycle: push registration, receipt, local log and badge."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping

from chatpush.domain.entities import (
    ChatNavigation,
    NotificationRecord,
    RemoteMessage,
    navigation_for,
    parse_notification_payload,
)
from chatpush.domain.errors import (
    BackendError,
    PermissionDeniedError,
    StorageError,
    SubscriptionError,
    TokenError,
)
from chatpush.domain.ports import (
    BadgePresenter,
    DeviceRegistrar,
    KeyValueStore,
    PermissionStatus,
    PushDeliveryService,
    Unsubscribe,
)
from chatpush.infrastructure.notifications import (
    Listener,
    NotificationEvent,
    NotificationEventBus,
    Subscription,
    decode_notification_log,
    encode_notification_log,
)
from chatpush.utils import current_epoch_millis

from .records import build_notification_record, count_unread, mark_all_read, new_record_id

logger = logging.getLogger(__name__)

STORED_NOTIFICATIONS_KEY = "stored_notifications"
TOKEN_KEY = "fcm_token"
BADGE_COUNT_KEY = "badge_count"

_TOPIC_PATTERN = re.compile(r"^[a-zA-Z0-9\-_.~%]{1,900}$")


class NotificationLifecycleManager:
    """Single owner of the notification log, the unread counter and the token.

    Every delivery-state handler and every user action goes through this object,
    so nothing else writes the persisted log. Storage failures never propagate:
    reads fall back to an empty log and writes are logged and skipped.
    """

    def __init__(
        self,
        delivery: PushDeliveryService,
        store: KeyValueStore,
        events: NotificationEventBus | None = None,
        *,
        badge: BadgePresenter | None = None,
        registrar: DeviceRegistrar | None = None,
        clock: Callable[[], int] = current_epoch_millis,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._delivery = delivery
        self._store = store
        self.events = events if events is not None else NotificationEventBus()
        self._badge = badge
        self._registrar = registrar
        self._clock = clock
        self._id_factory = id_factory
        self._token: str | None = None
        self._handler_unsubscribes: list[Unsubscribe] = []
        self._handlers_installed = False
        self._initial_notification_checked = False

    @property
    def handlers_installed(self) -> bool:
        return self._handlers_installed

    async def initialize(self) -> str:
        """Register for push delivery and return the registration token.

        Permission denial is logged and does not stop initialization. A token
        failure raises :class:`TokenError`; calling ``initialize`` again retries.
        """

        if not await self.request_permission():
            logger.warning("Notification permission denied; notifications will not be shown")

        token = await self.get_token()
        logger.info("Registration token obtained: %s...", token[:10])
        await self._cache_token(token)
        self._install_handlers()
        await self._register_token(token)
        await self._check_initial_notification()
        return token

    async def request_permission(self) -> bool:
        """Ask the platform for notification permission. Never raises."""

        try:
            status = PermissionStatus(await self._delivery.request_permission())
        except PermissionDeniedError as exc:
            logger.info("Notification permission denied: %s", exc)
            return False
        except Exception as exc:
            logger.warning("Notification permission request failed: %s", exc)
            return False
        return status.allows_delivery

    async def get_token(self) -> str:
        try:
            token = await self._delivery.get_token()
        except TokenError:
            raise
        except Exception as exc:
            logger.error("Error getting registration token: %s", exc)
            raise TokenError("Could not obtain a registration token") from exc
        if not token:
            raise TokenError("Push delivery service returned an empty token")
        self._token = token
        return token

    async def get_cached_token(self) -> str | None:
        """Return the last token obtained, falling back to the persisted copy."""

        if self._token is not None:
            return self._token
        try:
            return await self._store.get(TOKEN_KEY)
        except StorageError:
            return None

    async def handle_foreground_message(self, message: RemoteMessage) -> NotificationRecord:
        """Append ``message``, announce it and propagate the new unread count."""

        logger.info("Foreground message %s received", message.message_id)
        record, records = await self._append(message)
        await self.events.emit(NotificationEvent.NEW_NOTIFICATION, record)
        await self._propagate_badge_count(count_unread(records))
        return record

    async def handle_background_message(self, message: RemoteMessage) -> NotificationRecord | None:
        """Append ``message`` without touching the UI.

        Display-only messages are rendered by the platform and are not logged.
        """

        if not message.has_data:
            logger.info(
                "Background message %s carries no data payload; left to the platform",
                message.message_id,
            )
            return None
        logger.info("Background message %s received", message.message_id)
        record, _ = await self._append(message)
        return record

    async def handle_notification_opened(self, message: RemoteMessage) -> ChatNavigation | None:
        """Dispatch the deep link of a tapped notification; the log is untouched."""

        logger.info("Notification %s opened the app", message.message_id)
        return await self.handle_deep_link(message.data)

    async def handle_deep_link(self, data: Mapping[str, Any] | None) -> ChatNavigation | None:
        """Emit ``navigate_to_chat`` when ``data`` identifies a chat."""

        navigation = navigation_for(parse_notification_payload(data))
        if navigation is None:
            logger.debug("Payload has no chat identifier; nothing to open")
            return None
        await self.events.emit(NotificationEvent.NAVIGATE_TO_CHAT, navigation)
        return navigation

    async def handle_token_refresh(self, token: str) -> None:
        """Replace the cached token wholesale and announce it to the server."""

        logger.info("Registration token refreshed: %s...", token[:10])
        self._token = token
        await self._cache_token(token)
        await self._register_token(token)

    async def get_stored_notifications(self) -> list[NotificationRecord]:
        return await self._load_records()

    async def get_badge_count(self) -> int:
        """Return the unread count computed from the log.

        Background deliveries do not update the counter, so a stale persisted
        value is corrected and propagated here.
        """

        count = count_unread(await self._load_records())
        if await self._read_stored_badge_count() != count:
            await self._propagate_badge_count(count)
        return count

    async def set_badge_count(self, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError("Badge count must be a non-negative integer")
        await self._propagate_badge_count(count)

    async def clear_badge_count(self) -> None:
        """Mark every stored record read and reset the counter."""

        records = await self._load_records()
        if any(not record.read for record in records):
            await self._save_records(mark_all_read(records))
        await self._propagate_badge_count(0)

    async def clear_all_notifications(self) -> None:
        """Empty the log and reset the counter."""

        try:
            await self._store.remove(STORED_NOTIFICATIONS_KEY)
        except StorageError as exc:
            logger.error("Error clearing stored notifications: %s", exc)
        await self._propagate_badge_count(0)

    async def subscribe_to_topic(self, topic: str) -> None:
        topic = _validate_topic(topic)
        try:
            await self._delivery.subscribe_to_topic(topic)
        except Exception as exc:
            logger.error("Error subscribing to topic %s: %s", topic, exc)
            raise SubscriptionError(topic, f"Failed to subscribe to topic '{topic}'") from exc
        logger.info("Subscribed to topic %s", topic)

    async def unsubscribe_from_topic(self, topic: str) -> None:
        topic = _validate_topic(topic)
        try:
            await self._delivery.unsubscribe_from_topic(topic)
        except Exception as exc:
            logger.error("Error unsubscribing from topic %s: %s", topic, exc)
            raise SubscriptionError(
                topic, f"Failed to unsubscribe from topic '{topic}'"
            ) from exc
        logger.info("Unsubscribed from topic %s", topic)

    def add_listener(self, event: NotificationEvent | str, listener: Listener) -> Subscription:
        return self.events.subscribe(event, listener)

    def close(self) -> None:
        """Detach from the delivery service and drop every listener."""

        for unsubscribe in self._handler_unsubscribes:
            unsubscribe()
        self._handler_unsubscribes = []
        if self._handlers_installed:
            self._delivery.set_background_handler(None)
        self._handlers_installed = False
        self.events.clear()

    def _install_handlers(self) -> None:
        if self._handlers_installed:
            return
        self._delivery.set_background_handler(self.handle_background_message)
        self._handler_unsubscribes = [
            self._delivery.on_message(self.handle_foreground_message),
            self._delivery.on_notification_opened(self.handle_notification_opened),
            self._delivery.on_token_refresh(self.handle_token_refresh),
        ]
        self._handlers_installed = True

    async def _check_initial_notification(self) -> None:
        if self._initial_notification_checked:
            return
        self._initial_notification_checked = True
        try:
            message = await self._delivery.get_initial_notification()
        except Exception as exc:
            logger.warning("Could not read the initial notification: %s", exc)
            return
        if message is None:
            return
        logger.info("Notification %s launched the app from quit state", message.message_id)
        await self.handle_deep_link(message.data)

    async def _register_token(self, token: str) -> None:
        if self._registrar is None:
            return
        try:
            await self._registrar.register_device(token)
        except BackendError as exc:
            logger.warning("Could not register device token with the server: %s", exc)

    async def _cache_token(self, token: str) -> None:
        try:
            await self._store.set(TOKEN_KEY, token)
        except StorageError as exc:
            logger.error("Error caching registration token: %s", exc)

    async def _append(
        self, message: RemoteMessage
    ) -> tuple[NotificationRecord, list[NotificationRecord]]:
        record = build_notification_record(
            message, record_id=self._id_factory(), timestamp=self._clock()
        )
        records = await self._load_records()
        records.append(record)
        await self._save_records(records)
        return record, records

    async def _load_records(self) -> list[NotificationRecord]:
        try:
            return decode_notification_log(await self._store.get(STORED_NOTIFICATIONS_KEY))
        except StorageError as exc:
            logger.error("Error getting stored notifications: %s", exc)
            return []

    async def _save_records(self, records: list[NotificationRecord]) -> None:
        try:
            await self._store.set(STORED_NOTIFICATIONS_KEY, encode_notification_log(records))
        except StorageError as exc:
            logger.error("Error storing notifications: %s", exc)

    async def _read_stored_badge_count(self) -> int | None:
        try:
            raw = await self._store.get(BADGE_COUNT_KEY)
        except StorageError:
            return None
        try:
            return int(raw) if raw is not None else None
        except ValueError:
            return None

    async def _propagate_badge_count(self, count: int) -> None:
        try:
            await self._store.set(BADGE_COUNT_KEY, str(count))
        except StorageError as exc:
            logger.error("Error storing badge count: %s", exc)
        if self._badge is not None:
            try:
                await self._badge.set_badge_count(count)
            except Exception as exc:
                logger.error("Error updating badge count: %s", exc)
        await self.events.emit(NotificationEvent.BADGE_COUNT_CHANGED, count)


def _validate_topic(topic: str) -> str:
    normalized = (topic or "").strip()
    if not _TOPIC_PATTERN.match(normalized):
        raise SubscriptionError(normalized, f"Invalid topic name '{topic}'")
    return normalized


__all__ = [
    "NotificationLifecycleManager",
    "STORED_NOTIFICATIONS_KEY",
    "TOKEN_KEY",
    "BADGE_COUNT_KEY",
]
