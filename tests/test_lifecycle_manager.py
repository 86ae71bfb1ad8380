"""Behaviour of the notification lifecycle manager across delivery states."""

from __future__ import annotations

import httpx
import pytest

from chatpush.application.use_cases.notifications import (
    BADGE_COUNT_KEY,
    STORED_NOTIFICATIONS_KEY,
    TOKEN_KEY,
    NotificationLifecycleManager,
)
from chatpush.domain.entities import (
    ChatNavigation,
    DeliveryState,
    DisplayNotification,
    NotificationRecord,
    RemoteMessage,
)
from chatpush.domain.errors import (
    BackendError,
    PermissionDeniedError,
    StorageError,
    SubscriptionError,
    TokenError,
)
from chatpush.domain.ports import PermissionStatus
from chatpush.infrastructure.backend_client import DemoBackendClient
from chatpush.infrastructure.notifications import NotificationEvent, encode_notification_log
from chatpush.infrastructure.push import LocalPushDeliveryService
from chatpush.infrastructure.storage import InMemoryKeyValueStore

pytestmark = pytest.mark.anyio


def _chat_message(message_id: str = "m1", **overrides) -> RemoteMessage:
    data = {"chatId": "c1", "sender": "Bob", "messageId": message_id}
    data.update(overrides)
    return RemoteMessage(
        message_id=message_id,
        notification=DisplayNotification(title="Bob", body="Hi there"),
        data=data,
    )


class FailingStore:
    """Store whose every operation fails."""

    async def get(self, key):
        raise StorageError(f"cannot read {key}")

    async def set(self, key, value):
        raise StorageError(f"cannot write {key}")

    async def remove(self, key):
        raise StorageError(f"cannot remove {key}")


class UnreachableRegistrar:
    async def register_device(self, token, *, user_id=None, device_info=None):
        raise BackendError("connection refused")


async def test_initialize_returns_token_and_caches_it(manager, delivery, store, registrar):
    token = await manager.initialize()

    assert token == "token-1234567890abcdef"
    assert store.snapshot()[TOKEN_KEY] == token
    assert await manager.get_cached_token() == token
    assert registrar.tokens == [token]
    assert manager.handlers_installed
    assert delivery.has_background_handler


async def test_initialize_twice_installs_handlers_once(manager, delivery, events):
    await manager.initialize()
    await manager.initialize()

    assert delivery.handler_count() == 4
    assert await delivery.deliver(_chat_message()) == 1
    assert len(events[NotificationEvent.NEW_NOTIFICATION]) == 1


async def test_permission_denied_does_not_stop_initialization(store):
    delivery = LocalPushDeliveryService(token="abc", permission=PermissionStatus.DENIED)
    manager = NotificationLifecycleManager(delivery, store)

    assert await manager.request_permission() is False
    assert await manager.initialize() == "abc"
    assert manager.handlers_installed


async def test_provisional_permission_allows_delivery(store):
    delivery = LocalPushDeliveryService(permission=PermissionStatus.PROVISIONAL)
    manager = NotificationLifecycleManager(delivery, store)

    assert await manager.request_permission() is True


async def test_token_failure_raises_and_retry_succeeds(manager, delivery):
    delivery.token_error = RuntimeError("service unavailable")

    with pytest.raises(TokenError):
        await manager.initialize()
    assert not manager.handlers_installed
    assert delivery.handler_count() == 0

    delivery.token_error = None
    assert await manager.initialize() == "token-1234567890abcdef"
    assert manager.handlers_installed


async def test_empty_token_is_rejected(store):
    delivery = LocalPushDeliveryService(token_factory=lambda: "")
    manager = NotificationLifecycleManager(delivery, store)

    with pytest.raises(TokenError):
        await manager.get_token()


async def test_unreachable_registrar_is_not_fatal(delivery, store):
    manager = NotificationLifecycleManager(delivery, store, registrar=UnreachableRegistrar())

    assert await manager.initialize() == "token-1234567890abcdef"


async def test_foreground_message_is_logged_announced_and_counted(
    manager, delivery, events, badge
):
    await manager.initialize()

    await delivery.deliver(_chat_message())

    stored = await manager.get_stored_notifications()
    assert len(stored) == 1
    record = stored[0]
    assert record.title == "Bob"
    assert record.body == "Hi there"
    assert record.data == {"chatId": "c1", "sender": "Bob", "messageId": "m1"}
    assert record.read is False
    assert record.timestamp == 1_000
    assert events[NotificationEvent.NEW_NOTIFICATION] == [record]
    assert events[NotificationEvent.BADGE_COUNT_CHANGED] == [1]
    assert badge.counts == [1]
    assert await manager.get_badge_count() == 1


async def test_titles_fall_back_to_data_then_defaults(manager):
    from_data = await manager.handle_foreground_message(
        RemoteMessage(data={"title": "Alice", "body": "Lunch?"})
    )
    defaults = await manager.handle_foreground_message(RemoteMessage(data={"chatId": "c2"}))

    assert (from_data.title, from_data.body) == ("Alice", "Lunch?")
    assert (defaults.title, defaults.body) == ("New Message", "You have a new message")


async def test_record_ids_are_unique(manager):
    first = await manager.handle_foreground_message(_chat_message("m1"))
    second = await manager.handle_foreground_message(_chat_message("m2"))

    assert first.id != second.id


async def test_background_message_is_logged_silently(manager, delivery, events, store):
    await manager.initialize()

    invoked = await delivery.deliver(_chat_message(), DeliveryState.BACKGROUND)

    assert invoked == 1
    assert len(await manager.get_stored_notifications()) == 1
    assert events[NotificationEvent.NEW_NOTIFICATION] == []
    assert events[NotificationEvent.BADGE_COUNT_CHANGED] == []
    assert BADGE_COUNT_KEY not in store.snapshot()


async def test_background_message_without_data_is_skipped(manager):
    message = RemoteMessage(notification=DisplayNotification(title="Hello", body="World"))

    assert await manager.handle_background_message(message) is None
    assert await manager.get_stored_notifications() == []


async def test_badge_count_is_recomputed_after_background_delivery(
    manager, delivery, events, badge
):
    await manager.initialize()
    await delivery.deliver(_chat_message("m1"))
    await delivery.deliver(_chat_message("m2"), DeliveryState.BACKGROUND)

    assert await manager.get_badge_count() == 2
    assert events[NotificationEvent.BADGE_COUNT_CHANGED] == [1, 2]
    assert badge.counts == [1, 2]


async def test_quit_state_message_opens_chat_on_next_launch(delivery, store):
    await delivery.deliver(_chat_message(), DeliveryState.QUIT)
    manager = NotificationLifecycleManager(delivery, store)
    navigations = []
    manager.add_listener(NotificationEvent.NAVIGATE_TO_CHAT, navigations.append)

    await manager.initialize()

    assert navigations == [ChatNavigation(chat_id="c1", sender="Bob", message_id="m1")]


async def test_initial_notification_is_handled_once(manager, delivery, events):
    delivery.set_initial_notification(_chat_message())
    await manager.initialize()

    delivery.set_initial_notification(_chat_message("m2"))
    await manager.initialize()

    assert len(events[NotificationEvent.NAVIGATE_TO_CHAT]) == 1


async def test_opened_notification_navigates_without_touching_log(manager, delivery, events):
    await manager.initialize()
    await delivery.deliver(_chat_message(), DeliveryState.BACKGROUND)
    before = await manager.get_stored_notifications()

    await delivery.open_notification(_chat_message())

    assert events[NotificationEvent.NAVIGATE_TO_CHAT] == [
        ChatNavigation(chat_id="c1", sender="Bob", message_id="m1")
    ]
    assert await manager.get_stored_notifications() == before


async def test_opened_notification_without_chat_is_ignored(manager, events):
    navigation = await manager.handle_notification_opened(
        RemoteMessage(data={"promo": "spring"})
    )

    assert navigation is None
    assert events[NotificationEvent.NAVIGATE_TO_CHAT] == []


async def test_call_deep_link_opens_caller_chat(manager, events):
    navigation = await manager.handle_deep_link(
        {"type": "call", "callerName": "Alice", "callId": "call_1", "chatId": "chat_Alice"}
    )

    assert navigation == ChatNavigation(chat_id="chat_Alice", sender="Alice")
    assert events[NotificationEvent.NAVIGATE_TO_CHAT] == [navigation]


async def test_deep_link_preserves_action(manager):
    navigation = await manager.handle_deep_link({"chatId": "c1", "action": "reply"})

    assert navigation.as_dict() == {
        "chatId": "c1",
        "sender": None,
        "messageId": None,
        "action": "reply",
    }


async def test_clear_badge_count_marks_everything_read(manager, events, badge):
    await manager.handle_foreground_message(_chat_message("m1"))
    await manager.handle_foreground_message(_chat_message("m2"))

    await manager.clear_badge_count()

    stored = await manager.get_stored_notifications()
    assert len(stored) == 2
    assert all(record.read for record in stored)
    assert await manager.get_badge_count() == 0
    assert events[NotificationEvent.BADGE_COUNT_CHANGED][-1] == 0
    assert badge.counts[-1] == 0


async def test_clear_all_notifications_is_idempotent(manager, store, events):
    await manager.handle_foreground_message(_chat_message())

    await manager.clear_all_notifications()
    await manager.clear_all_notifications()

    assert await manager.get_stored_notifications() == []
    assert await manager.get_badge_count() == 0
    assert STORED_NOTIFICATIONS_KEY not in store.snapshot()
    assert events[NotificationEvent.BADGE_COUNT_CHANGED] == [1, 0, 0]


async def test_unread_count_matches_log_after_mixed_operations(manager):
    await manager.handle_foreground_message(_chat_message("m1"))
    await manager.handle_background_message(_chat_message("m2"))
    await manager.clear_badge_count()
    await manager.handle_foreground_message(_chat_message("m3"))
    await manager.handle_background_message(_chat_message("m4"))

    stored = await manager.get_stored_notifications()
    unread = sum(1 for record in stored if not record.read)
    assert unread == 2
    assert await manager.get_badge_count() == unread


async def test_set_badge_count_overrides_and_validates(manager, badge, events):
    await manager.set_badge_count(5)

    assert badge.counts == [5]
    assert events[NotificationEvent.BADGE_COUNT_CHANGED] == [5]
    for invalid in (-1, True, 2.5):
        with pytest.raises(ValueError):
            await manager.set_badge_count(invalid)


async def test_stale_stored_badge_count_is_corrected(delivery, badge):
    records = [
        NotificationRecord(id="a", title="t", body="b", data={"chatId": "c1"}),
        NotificationRecord(id="b", title="t", body="b", data={"chatId": "c1"}),
        NotificationRecord(id="c", title="t", body="b", data={"chatId": "c1"}, read=True),
    ]
    store = InMemoryKeyValueStore(
        {STORED_NOTIFICATIONS_KEY: encode_notification_log(records), BADGE_COUNT_KEY: "0"}
    )
    manager = NotificationLifecycleManager(delivery, store, badge=badge)

    assert await manager.get_badge_count() == 2
    assert store.snapshot()[BADGE_COUNT_KEY] == "2"
    assert badge.counts == [2]

    assert await manager.get_badge_count() == 2
    assert badge.counts == [2]


async def test_corrupt_log_reads_as_empty(delivery):
    store = InMemoryKeyValueStore({STORED_NOTIFICATIONS_KEY: "{not json"})
    manager = NotificationLifecycleManager(delivery, store)

    assert await manager.get_stored_notifications() == []

    await manager.handle_foreground_message(_chat_message())
    assert len(await manager.get_stored_notifications()) == 1


async def test_storage_failures_do_not_propagate(delivery):
    manager = NotificationLifecycleManager(delivery, FailingStore())
    received = []
    manager.add_listener(NotificationEvent.NEW_NOTIFICATION, received.append)

    record = await manager.handle_foreground_message(_chat_message())
    await manager.handle_background_message(_chat_message("m2"))
    await manager.clear_badge_count()
    await manager.clear_all_notifications()

    assert received == [record]
    assert await manager.get_stored_notifications() == []
    assert await manager.get_badge_count() == 0
    assert await manager.initialize() == "token-1234567890abcdef"
    assert await manager.get_cached_token() == "token-1234567890abcdef"


async def test_token_refresh_replaces_cache_and_registers(manager, delivery, store, registrar):
    await manager.initialize()

    await delivery.refresh_token("token-refreshed")

    assert await manager.get_cached_token() == "token-refreshed"
    assert store.snapshot()[TOKEN_KEY] == "token-refreshed"
    assert registrar.tokens == ["token-1234567890abcdef", "token-refreshed"]


async def test_cached_token_falls_back_to_store(delivery):
    store = InMemoryKeyValueStore({TOKEN_KEY: "persisted-token"})
    manager = NotificationLifecycleManager(delivery, store)

    assert await manager.get_cached_token() == "persisted-token"


async def test_topic_subscription_round_trip(manager, delivery):
    await manager.subscribe_to_topic("news")
    assert delivery.topics == {"news"}

    await manager.unsubscribe_from_topic("news")
    assert delivery.topics == set()


async def test_topic_failure_raises_subscription_error(manager, delivery):
    await manager.subscribe_to_topic("news")
    delivery.subscription_error = RuntimeError("quota exceeded")

    with pytest.raises(SubscriptionError) as excinfo:
        await manager.subscribe_to_topic("sports")
    assert excinfo.value.topic == "sports"

    with pytest.raises(SubscriptionError):
        await manager.unsubscribe_from_topic("news")
    assert delivery.topics == {"news"}


async def test_invalid_topic_name_is_rejected(manager, delivery):
    with pytest.raises(SubscriptionError):
        await manager.subscribe_to_topic("bad topic!")
    with pytest.raises(SubscriptionError):
        await manager.subscribe_to_topic("")
    assert delivery.topics == set()


async def test_subscription_handle_stops_delivery(manager):
    received = []
    subscription = manager.add_listener("new_notification", received.append)

    await manager.handle_foreground_message(_chat_message("m1"))
    subscription.unsubscribe()
    subscription.unsubscribe()
    await manager.handle_foreground_message(_chat_message("m2"))

    assert len(received) == 1
    assert not subscription.active


async def test_close_detaches_from_delivery_service(manager, delivery, events):
    await manager.initialize()

    manager.close()

    assert delivery.handler_count() == 0
    assert not delivery.has_background_handler
    assert manager.events.listener_count() == 0
    assert await delivery.deliver(_chat_message()) == 0
    assert await manager.get_stored_notifications() == []


async def test_permission_denied_error_is_not_fatal(manager, delivery):
    delivery.permission_error = PermissionDeniedError("blocked by device policy")

    assert await manager.request_permission() is False
    assert await manager.initialize() == "token-1234567890abcdef"
    assert manager.handlers_installed


async def test_unreadable_backend_reply_does_not_break_initialization(delivery, store):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="OK")

    client = DemoBackendClient(
        "http://backend.test", transport=httpx.MockTransport(handler)
    )
    manager = NotificationLifecycleManager(delivery, store, registrar=client)

    assert await manager.initialize() == "token-1234567890abcdef"
    assert manager.handlers_installed

    await delivery.refresh_token("token-refreshed")
    assert await manager.get_cached_token() == "token-refreshed"
    await client.aclose()


async def test_topic_changes_leave_log_and_badge_untouched(manager, delivery, events):
    await manager.handle_foreground_message(_chat_message("m1"))
    await manager.handle_foreground_message(_chat_message("m2"))
    await manager.clear_badge_count()
    await manager.handle_foreground_message(_chat_message("m3"))
    stored_before = await manager.get_stored_notifications()
    badge_before = await manager.get_badge_count()
    badge_events_before = list(events[NotificationEvent.BADGE_COUNT_CHANGED])

    await manager.subscribe_to_topic("test-topic")
    await manager.unsubscribe_from_topic("test-topic")

    delivery.subscription_error = RuntimeError("service unavailable")
    with pytest.raises(SubscriptionError):
        await manager.subscribe_to_topic("test-topic")
    with pytest.raises(SubscriptionError):
        await manager.unsubscribe_from_topic("test-topic")

    assert await manager.get_stored_notifications() == stored_before
    assert await manager.get_badge_count() == badge_before == 1
    assert events[NotificationEvent.BADGE_COUNT_CHANGED] == badge_events_before
