"""Volatile storage for device tokens registered with the demo backend."""

from __future__ import annotations

from collections.abc import Sequence

from chatpush.domain.entities import RegisteredDevice


class DeviceRepository:
    """Keep registered devices in memory, one entry per token."""

    def __init__(self) -> None:
        self._devices: list[RegisteredDevice] = []

    def register(self, device: RegisteredDevice) -> RegisteredDevice:
        """Store ``device``, replacing any earlier registration of its token."""

        self._devices = [item for item in self._devices if item.token != device.token]
        self._devices.append(device)
        return device

    def list(self) -> Sequence[RegisteredDevice]:
        return list(self._devices)

    def count(self) -> int:
        return len(self._devices)


__all__ = ["DeviceRepository"]
