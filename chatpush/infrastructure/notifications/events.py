"""In-process event bus connecting the lifecycle manager to presentation code."""

from __future__ import annotations

import inspect
import itertools
import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]


class NotificationEvent(str, Enum):
    """Names of the events emitted by the lifecycle manager."""

    NEW_NOTIFICATION = "new_notification"
    NAVIGATE_TO_CHAT = "navigate_to_chat"
    BADGE_COUNT_CHANGED = "badge_count_changed"


class Subscription:
    """Handle returned by :meth:`NotificationEventBus.subscribe`."""

    def __init__(self, bus: "NotificationEventBus", event: NotificationEvent, key: int) -> None:
        self._bus = bus
        self.event = event
        self._key = key

    @property
    def active(self) -> bool:
        return self._bus._is_registered(self.event, self._key)

    def unsubscribe(self) -> None:
        """Stop delivering events to the listener. Safe to call twice."""

        self._bus._remove(self.event, self._key)


class NotificationEventBus:
    """Keep listeners grouped by event and deliver payloads in registration order."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[NotificationEvent, dict[int, Listener]] = defaultdict(dict)
        self._keys = itertools.count(1)

    def subscribe(self, event: NotificationEvent | str, listener: Listener) -> Subscription:
        """Register ``listener`` for ``event`` and return its subscription."""

        event = NotificationEvent(event)
        key = next(self._keys)
        self._listeners[event][key] = listener
        return Subscription(self, event, key)

    def listener_count(self, event: NotificationEvent | str | None = None) -> int:
        if event is None:
            return sum(len(listeners) for listeners in self._listeners.values())
        return len(self._listeners.get(NotificationEvent(event), {}))

    async def emit(self, event: NotificationEvent, payload: Any) -> int:
        """Deliver ``payload`` to every listener of ``event``.

        Coroutine listeners are awaited. A listener that raises is logged and the
        remaining listeners still receive the event. Returns the number of
        listeners that handled the payload without error.
        """

        delivered = 0
        for listener in list(self._listeners.get(event, {}).values()):
            try:
                result = listener(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Listener for %s failed", event.value)
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        """Drop every registered listener."""

        self._listeners.clear()

    def _is_registered(self, event: NotificationEvent, key: int) -> bool:
        return key in self._listeners.get(event, {})

    def _remove(self, event: NotificationEvent, key: int) -> None:
        listeners = self._listeners.get(event)
        if listeners is None:
            return
        listeners.pop(key, None)
        if not listeners:
            self._listeners.pop(event, None)


__all__ = ["Listener", "NotificationEvent", "NotificationEventBus", "Subscription"]
