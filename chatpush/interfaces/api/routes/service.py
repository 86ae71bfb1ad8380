"""Service description, smoke test and health probe routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from chatpush import __version__
from chatpush.interfaces.api.dependencies import DemoBackendState, get_backend_state
from chatpush.interfaces.api.schemas import HealthRead, ServiceInfo, ServiceTestRead
from chatpush.utils import now_in_app_timezone

router = APIRouter(tags=["service"])

SERVICE_NAME = "Chat Notification Backend Server"

ENDPOINTS = {
    "POST /send-notification": "Send a notification to a specific device",
    "POST /send-topic-notification": "Send a notification to a topic",
    "POST /register-device": "Register a device token",
    "GET /devices": "Get all registered devices",
    "GET /notifications": "Get notification history",
    "DELETE /notifications": "Clear notification history",
    "POST /simulate-call": "Simulate an incoming call notification",
}


@router.get("/", response_model=ServiceInfo)
async def root() -> ServiceInfo:
    return ServiceInfo(message=SERVICE_NAME, version=__version__, endpoints=ENDPOINTS)


@router.get("/test", response_model=ServiceTestRead)
async def test_endpoint(state: DemoBackendState = Depends(get_backend_state)) -> ServiceTestRead:
    return ServiceTestRead(
        message="Server is running",
        timestamp=now_in_app_timezone(),
        connected_devices=state.devices.count(),
        notifications_sent=state.history.count(),
    )


@router.get("/health", response_model=HealthRead)
async def health(state: DemoBackendState = Depends(get_backend_state)) -> HealthRead:
    return HealthRead(status="healthy", uptime=state.uptime(), timestamp=now_in_app_timezone())
