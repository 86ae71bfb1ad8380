"""Run the notification lifecycle end to end against an in-process push service."""

from __future__ import annotations

import argparse
import logging

import anyio

from chatpush.application.context import build_notification_context
from chatpush.config import get_settings
from chatpush.domain.entities import DeliveryState, DisplayNotification, RemoteMessage
from chatpush.domain.errors import NotificationError
from chatpush.infrastructure.notifications import NotificationEvent
from chatpush.infrastructure.push import LocalPushDeliveryService
from chatpush.infrastructure.storage import InMemoryKeyValueStore
from chatpush.utils import configure_logging, millis_to_datetime

logger = logging.getLogger("simulate_notifications")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the simulation."""

    parser = argparse.ArgumentParser(
        description="Deliver sample chat notifications in every app state.",
    )
    parser.add_argument("--sender", default="Bob", help="Name shown as the message sender")
    parser.add_argument("--chat-id", default="c1", help="Chat the messages belong to")
    parser.add_argument(
        "--messages",
        type=int,
        default=3,
        help="Number of foreground messages to deliver (default: 3)",
    )
    parser.add_argument(
        "--persist",
        action="store_true",
        help="Use the configured database store instead of an in-memory one",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear every notification at the end of the run",
    )
    return parser.parse_args()


def _message(index: int, *, sender: str, chat_id: str) -> RemoteMessage:
    return RemoteMessage(
        message_id=f"m{index}",
        notification=DisplayNotification(title=sender, body=f"Message {index} from {sender}"),
        data={"chatId": chat_id, "sender": sender, "messageId": f"m{index}"},
    )


async def run(args: argparse.Namespace) -> None:
    settings = get_settings()
    delivery = LocalPushDeliveryService()
    store = None if args.persist else InMemoryKeyValueStore()
    context = build_notification_context(delivery, settings=settings, store=store)

    context.events.subscribe(
        NotificationEvent.NEW_NOTIFICATION,
        lambda record: logger.info("New notification: %s - %s", record.title, record.body),
    )
    context.events.subscribe(
        NotificationEvent.NAVIGATE_TO_CHAT,
        lambda navigation: logger.info("Navigate to chat: %s", navigation.as_dict()),
    )
    context.events.subscribe(
        NotificationEvent.BADGE_COUNT_CHANGED,
        lambda count: logger.info("Badge count: %s", count),
    )

    try:
        token = await context.start()
        logger.info("Registered with token %s", token)

        for index in range(1, args.messages + 1):
            await delivery.deliver(_message(index, sender=args.sender, chat_id=args.chat_id))

        background = _message(args.messages + 1, sender=args.sender, chat_id=args.chat_id)
        await delivery.deliver(background, DeliveryState.BACKGROUND)
        await delivery.open_notification(background)

        manager = context.manager
        logger.info("Unread notifications: %s", await manager.get_badge_count())
        for record in await manager.get_stored_notifications():
            logger.info(
                "[%s] %s: %s (read=%s)",
                millis_to_datetime(record.timestamp).isoformat(timespec="seconds"),
                record.title,
                record.body,
                record.read,
            )

        await manager.clear_badge_count()
        if args.clear:
            await manager.clear_all_notifications()
    except NotificationError as exc:
        raise SystemExit(f"Simulation failed: {exc}") from exc
    finally:
        await context.close()


def main() -> None:
    """Run the simulation using the provided command line arguments."""

    args = parse_args()
    configure_logging(get_settings().log_level)
    anyio.run(run, args)


if __name__ == "__main__":
    main()
