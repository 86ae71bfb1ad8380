"""HTTP client for the demo backend."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from chatpush.domain.errors import BackendError

logger = logging.getLogger(__name__)


class DemoBackendClient:
    """Register device tokens with the demo backend and trigger test sends.

    Implements :class:`~chatpush.domain.ports.DeviceRegistrar`. ``transport`` is
    forwarded to :class:`httpx.AsyncClient` so callers can plug in a mock.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def register_device(
        self,
        token: str,
        *,
        user_id: str | None = None,
        device_info: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:
        payload: dict[str, Any] = {"token": token}
        if user_id:
            payload["userId"] = user_id
        if device_info:
            payload["deviceInfo"] = dict(device_info)
        return await self._post("/register-device", payload)

    async def send_test_notification(
        self,
        token: str,
        *,
        title: str,
        body: str,
        data: Mapping[str, str] | None = None,
    ) -> Mapping[str, Any]:
        payload = {"token": token, "title": title, "body": body, "data": dict(data or {})}
        return await self._post("/send-notification", payload)

    async def simulate_call(
        self, token: str, *, caller_name: str, call_type: str = "voice"
    ) -> Mapping[str, Any]:
        payload = {"token": token, "callerName": caller_name, "callType": call_type}
        return await self._post("/simulate-call", payload)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, payload: dict[str, Any]) -> Mapping[str, Any]:
        try:
            response = await self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Demo backend request to %s failed: %s", path, exc)
            raise BackendError(f"Could not reach demo backend at {self.base_url}") from exc

        if response.is_error:
            detail = _extract_detail(response)
            logger.warning(
                "Demo backend answered %s for %s: %s", response.status_code, path, detail
            )
            raise BackendError(detail, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Demo backend answered %s with a non-JSON body", path)
            raise BackendError(
                f"Demo backend returned an unreadable response for {path}",
                status_code=response.status_code,
            ) from exc


def _extract_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if detail:
            return str(detail)
    return f"HTTP {response.status_code}"


__all__ = ["DemoBackendClient"]
