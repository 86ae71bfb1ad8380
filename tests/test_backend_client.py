"""Tests for the demo backend HTTP client using a mocked transport."""

from __future__ import annotations

import json

import httpx
import pytest

from chatpush.domain.errors import BackendError
from chatpush.infrastructure.backend_client import DemoBackendClient

pytestmark = pytest.mark.anyio

BASE_URL = "http://backend.test"


def _client(handler) -> DemoBackendClient:
    return DemoBackendClient(BASE_URL, transport=httpx.MockTransport(handler))


async def test_register_device_posts_camel_case_payload():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200, json={"message": "Device registered successfully", "deviceId": "abc..."}
        )

    client = _client(handler)
    body = await client.register_device(
        "abc123", user_id="user-1", device_info={"platform": "android"}
    )
    await client.aclose()

    assert body["deviceId"] == "abc..."
    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert requests[0].url.path == "/register-device"
    assert json.loads(requests[0].content) == {
        "token": "abc123",
        "userId": "user-1",
        "deviceInfo": {"platform": "android"},
    }


async def test_register_device_omits_empty_optional_fields():
    payloads = []

    def handler(request: httpx.Request) -> httpx.Response:
        payloads.append(json.loads(request.content))
        return httpx.Response(200, json={})

    client = _client(handler)
    await client.register_device("abc123")
    await client.aclose()

    assert payloads == [{"token": "abc123"}]


async def test_simulate_call_payload():
    payloads = []

    def handler(request: httpx.Request) -> httpx.Response:
        payloads.append((request.url.path, json.loads(request.content)))
        return httpx.Response(200, json={"callId": "call_1"})

    client = _client(handler)
    await client.simulate_call("abc123", caller_name="Alice", call_type="video")
    await client.aclose()

    assert payloads == [
        ("/simulate-call", {"token": "abc123", "callerName": "Alice", "callType": "video"})
    ]


async def test_error_status_raises_backend_error_with_detail():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"detail": "Token is required"})

    client = _client(handler)
    with pytest.raises(BackendError) as excinfo:
        await client.send_test_notification("", title="t", body="b")
    await client.aclose()

    assert excinfo.value.status_code == 400
    assert str(excinfo.value) == "Token is required"


async def test_legacy_error_key_is_understood():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Failed to send notification"})

    client = _client(handler)
    with pytest.raises(BackendError, match="Failed to send notification"):
        await client.send_test_notification("abc", title="t", body="b")
    await client.aclose()


async def test_transport_failure_raises_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(BackendError) as excinfo:
        await client.register_device("abc123")
    await client.aclose()

    assert excinfo.value.status_code is None


async def test_non_json_success_body_raises_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="OK")

    client = _client(handler)
    with pytest.raises(BackendError) as excinfo:
        await client.register_device("abc123")
    await client.aclose()

    assert excinfo.value.status_code == 200
