"""Routes for registering device tokens."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from chatpush.application.use_cases.demo_backend import list_devices, register_device
from chatpush.domain.entities import RegisteredDevice
from chatpush.infrastructure.repositories import DeviceRepository
from chatpush.interfaces.api.dependencies import get_device_repository
from chatpush.interfaces.api.schemas import (
    DeviceListResponse,
    DeviceRead,
    DeviceRegisterRequest,
    DeviceRegisterResponse,
)

router = APIRouter(tags=["devices"])


def _to_read_model(device: RegisteredDevice) -> DeviceRead:
    return DeviceRead(
        device_id=device.device_id,
        user_id=device.user_id,
        registered_at=device.registered_at,
    )


@router.post("/register-device", response_model=DeviceRegisterResponse)
def register_device_endpoint(
    payload: DeviceRegisterRequest,
    repository: DeviceRepository = Depends(get_device_repository),
) -> DeviceRegisterResponse:
    """Register a device token; registering the same token again replaces it."""

    try:
        device = register_device(
            repository,
            token=payload.token,
            user_id=payload.user_id,
            device_info=payload.device_info,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return DeviceRegisterResponse(
        message="Device registered successfully", device_id=device.device_id
    )


@router.get("/devices", response_model=DeviceListResponse)
def list_devices_endpoint(
    repository: DeviceRepository = Depends(get_device_repository),
) -> DeviceListResponse:
    """Return every registered device with its token masked."""

    devices = [_to_read_model(device) for device in list_devices(repository)]
    return DeviceListResponse(devices=devices, count=len(devices))
