"""Tests for the chat proxy client, using httpx.MockTransport instead of a live proxy."""

import json

import httpx
import pytest
from pydantic import SecretStr

from medseller.conf.config import Settings
from medseller.integrations.chat_proxy import ChatProxyClient
from medseller.services.exceptions import RemoteFallbackError


PROXY_URL = "https://proxy.test/api/chat"


def make_client(handler, **kwargs) -> ChatProxyClient:
    transport = httpx.MockTransport(handler)
    return ChatProxyClient(PROXY_URL, client=httpx.AsyncClient(transport=transport), **kwargs)


@pytest.mark.asyncio
async def test_posts_prompt_and_context():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"response": "  Take with water.  "})

    client = make_client(handler, api_key="secret")

    text = await client.complete("How do I take it?", "Aspirin Plus | Pain Relief")

    assert text == "Take with water."
    assert seen == {
        "url": PROXY_URL,
        "body": {"prompt": "How do I take it?", "context": "Aspirin Plus | Pain Relief"},
        "auth": "Bearer secret",
    }


@pytest.mark.asyncio
async def test_no_auth_header_without_key():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"response": "ok"})

    assert await make_client(handler).complete("q", "") == "ok"


@pytest.mark.asyncio
async def test_error_status_raises_with_code():
    client = make_client(lambda request: httpx.Response(500, text="upstream down"))

    with pytest.raises(RemoteFallbackError) as exc_info:
        await client.complete("q", "")

    assert exc_info.value.status_code == 500
    assert "500" in exc_info.value.message


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"answer": "wrong key"}),
        httpx.Response(200, json={"response": "   "}),
        httpx.Response(200, json=["response"]),
    ],
)
async def test_unusable_body_raises(response):
    client = make_client(lambda request: response)

    with pytest.raises(RemoteFallbackError):
        await client.complete("q", "")


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteFallbackError, match="transport"):
        await make_client(handler).complete("q", "")


@pytest.mark.asyncio
async def test_timeout_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(RemoteFallbackError, match="timeout"):
        await make_client(handler).complete("q", "")


@pytest.mark.asyncio
async def test_injected_client_is_not_closed():
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    async with ChatProxyClient(PROXY_URL, client=http_client):
        pass

    assert not http_client.is_closed
    await http_client.aclose()


def test_from_settings():
    settings = Settings(
        CHAT_PROXY_URL=PROXY_URL,
        CHAT_PROXY_API_KEY=SecretStr("k"),
        CHAT_PROXY_TIMEOUT=5,
    )

    client = ChatProxyClient.from_settings(settings)

    assert client.url == PROXY_URL
    assert client._headers["Authorization"] == "Bearer k"
