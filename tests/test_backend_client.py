import json

import httpx
import pytest

from app.services.backend_client import FactBackendClient

BACKEND_URL = "https://backend.example/verify"


def _client(handler) -> FactBackendClient:
    return FactBackendClient(url=BACKEND_URL, timeout=5, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_verify_posts_text_and_returns_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"trustScore": 70, "claims": []})

    result, error = await _client(handler).verify("The sky is blue")

    assert seen["body"] == {"text": "The sky is blue"}
    assert result == {"trustScore": 70, "claims": []}
    assert error is None


@pytest.mark.asyncio
async def test_verify_non_2xx():
    result, error = await _client(lambda request: httpx.Response(502, text="bad gateway")).verify("x")

    assert result is None
    assert error == "Backend API error: 502"


@pytest.mark.asyncio
async def test_verify_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known")

    result, error = await _client(handler).verify("x")

    assert result is None
    assert error == "Name or service not known"


@pytest.mark.asyncio
async def test_verify_unparsable_body():
    result, error = await _client(lambda request: httpx.Response(200, text="<html>oops</html>")).verify("x")
    assert result is None
    assert error == "Backend returned an unparsable response"

    result, error = await _client(lambda request: httpx.Response(200, json=[1, 2])).verify("x")
    assert result is None
    assert error == "Backend returned an unparsable response"
