"""Use cases for device registration on the demo backend."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Mapping

from chatpush.domain.entities import RegisteredDevice
from chatpush.infrastructure.repositories import DeviceRepository
from chatpush.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"


def register_device(
    repository: DeviceRepository,
    *,
    token: str | None,
    user_id: str | None = None,
    device_info: Mapping[str, Any] | None = None,
) -> RegisteredDevice:
    """Register ``token``, replacing an earlier registration of the same token."""

    normalized = (token or "").strip()
    if not normalized:
        raise ValueError("Token is required")

    device = RegisteredDevice(
        token=normalized,
        user_id=user_id or ANONYMOUS_USER,
        device_info=dict(device_info or {}),
        registered_at=now_in_app_timezone(),
    )
    repository.register(device)
    logger.info("Device registered: %s", device.user_id)
    return device


def list_devices(repository: DeviceRepository) -> Sequence[RegisteredDevice]:
    return repository.list()
