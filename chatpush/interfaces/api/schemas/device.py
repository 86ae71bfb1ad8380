"""Pydantic models describing device registration payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel


class DeviceRegisterRequest(CamelModel):
    """Token announced by a client, optionally tied to a user."""

    token: str | None = None
    user_id: str | None = None
    device_info: dict[str, Any] | None = None


class DeviceRegisterResponse(CamelModel):
    message: str
    device_id: str


class DeviceRead(CamelModel):
    """Registered device as listed by the backend; the token is masked."""

    device_id: str
    user_id: str
    registered_at: datetime


class DeviceListResponse(CamelModel):
    devices: list[DeviceRead] = Field(default_factory=list)
    count: int


__all__ = [
    "DeviceRegisterRequest",
    "DeviceRegisterResponse",
    "DeviceRead",
    "DeviceListResponse",
]
