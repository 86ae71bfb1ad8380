"""FastAPI dependencies exposing the demo backend's volatile state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from fastapi import Request

from chatpush.config import Settings, get_settings
from chatpush.infrastructure.push import PushSender, build_push_sender
from chatpush.infrastructure.repositories import DeviceRepository, SentNotificationRepository


@dataclass
class DemoBackendState:
    """In-memory state of one demo backend instance; lost on restart."""

    sender: PushSender
    devices: DeviceRepository = field(default_factory=DeviceRepository)
    history: SentNotificationRepository = field(default_factory=SentNotificationRepository)
    started_at: float = field(default_factory=time.monotonic)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DemoBackendState":
        return cls(sender=build_push_sender(settings))

    def uptime(self) -> float:
        return time.monotonic() - self.started_at


def get_backend_state(request: Request) -> DemoBackendState:
    return request.app.state.backend


def get_device_repository(request: Request) -> DeviceRepository:
    return get_backend_state(request).devices


def get_history_repository(request: Request) -> SentNotificationRepository:
    return get_backend_state(request).history


def get_push_sender(request: Request) -> PushSender:
    return get_backend_state(request).sender


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    return getattr(request.app.state, "settings", None) or get_settings()


__all__ = [
    "DemoBackendState",
    "get_app_settings",
    "get_backend_state",
    "get_device_repository",
    "get_history_repository",
    "get_push_sender",
]
