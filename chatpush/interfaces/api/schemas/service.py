"""Pydantic models for the service description and probe endpoints."""

from __future__ import annotations

from datetime import datetime

from .base import CamelModel


class ServiceInfo(CamelModel):
    message: str
    version: str
    endpoints: dict[str, str]


class ServiceTestRead(CamelModel):
    message: str
    timestamp: datetime
    connected_devices: int
    notifications_sent: int


class HealthRead(CamelModel):
    status: str
    uptime: float
    timestamp: datetime


__all__ = ["ServiceInfo", "ServiceTestRead", "HealthRead"]
