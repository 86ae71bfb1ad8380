"""Typed views over the string mapping carried by a push message."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

CALL_TYPE_VOICE = "voice"
UNKNOWN_CALLER = "Unknown"


class NotificationKind(str, Enum):
    """Discriminates the payload variants a notification may carry."""

    CHAT = "chat"
    CALL = "call"
    GENERIC = "generic"


@dataclass(frozen=True)
class ChatMessagePayload:
    """A message posted in a chat; tapping it opens the chat."""

    chat_id: str
    message_id: str | None = None
    sender: str | None = None
    action: str | None = None

    @property
    def kind(self) -> NotificationKind:
        return NotificationKind.CHAT


@dataclass(frozen=True)
class CallPayload:
    """An incoming voice or video call."""

    call_id: str | None
    call_type: str = CALL_TYPE_VOICE
    caller_name: str = UNKNOWN_CALLER
    chat_id: str | None = None
    sender: str | None = None

    @property
    def kind(self) -> NotificationKind:
        return NotificationKind.CALL


@dataclass(frozen=True)
class GenericPayload:
    """Any payload that is neither a chat message nor a call."""

    data: dict[str, str] = field(default_factory=dict)

    @property
    def kind(self) -> NotificationKind:
        return NotificationKind.GENERIC


NotificationPayload = Union[ChatMessagePayload, CallPayload, GenericPayload]


@dataclass(frozen=True)
class ChatNavigation:
    """Request for the presentation layer to open a chat screen."""

    chat_id: str
    sender: str | None = None
    message_id: str | None = None
    action: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        """Return the wire representation used by presentation listeners."""

        payload: dict[str, str | None] = {
            "chatId": self.chat_id,
            "sender": self.sender,
            "messageId": self.message_id,
        }
        if self.action:
            payload["action"] = self.action
        return payload


def normalize_data(data: Mapping[str, Any] | None) -> dict[str, str]:
    """Coerce ``data`` into the ``str -> str`` mapping push services carry.

    ``None`` values are dropped, everything else is converted with ``str``.
    """

    if not data:
        return {}
    normalized: dict[str, str] = {}
    for key, value in data.items():
        if value is None:
            continue
        normalized[str(key)] = value if isinstance(value, str) else str(value)
    return normalized


def _non_empty(data: Mapping[str, str], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_notification_payload(data: Mapping[str, Any] | None) -> NotificationPayload:
    """Return the typed variant matching ``data``."""

    normalized = normalize_data(data)
    if normalized.get("type") == NotificationKind.CALL.value:
        caller = _non_empty(normalized, "callerName") or UNKNOWN_CALLER
        return CallPayload(
            call_id=_non_empty(normalized, "callId"),
            call_type=_non_empty(normalized, "callType") or CALL_TYPE_VOICE,
            caller_name=caller,
            chat_id=_non_empty(normalized, "chatId"),
            sender=_non_empty(normalized, "sender") or caller,
        )

    chat_id = _non_empty(normalized, "chatId")
    if chat_id is not None:
        return ChatMessagePayload(
            chat_id=chat_id,
            message_id=_non_empty(normalized, "messageId"),
            sender=_non_empty(normalized, "sender"),
            action=_non_empty(normalized, "action"),
        )

    return GenericPayload(data=normalized)


def navigation_for(payload: NotificationPayload) -> ChatNavigation | None:
    """Return the chat navigation implied by ``payload``, if any."""

    if isinstance(payload, ChatMessagePayload):
        return ChatNavigation(
            chat_id=payload.chat_id,
            sender=payload.sender,
            message_id=payload.message_id,
            action=payload.action,
        )
    if isinstance(payload, CallPayload) and payload.chat_id:
        return ChatNavigation(chat_id=payload.chat_id, sender=payload.sender)
    return None


__all__ = [
    "CALL_TYPE_VOICE",
    "UNKNOWN_CALLER",
    "NotificationKind",
    "ChatMessagePayload",
    "CallPayload",
    "GenericPayload",
    "NotificationPayload",
    "ChatNavigation",
    "normalize_data",
    "parse_notification_payload",
    "navigation_for",
]
