"""Chat proxy client.

Forwards questions the local engine could not answer to a server-side proxy
that holds the language-model credentials.

Request:  POST {CHAT_PROXY_URL}  {"prompt": "...", "context": "..."}
Response: {"response": "..."}

No retries: one request per unresolved question.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from medseller.conf.config import Settings, get_settings
from medseller.services.exceptions import RemoteFallbackError


logger = logging.getLogger(__name__)


class ChatProxyClient:
    """Async client for the chat proxy.

    Usage:
        async with ChatProxyClient.from_settings() as client:
            text = await client.complete("Is it safe with coffee?", context)
    """

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            url: Full proxy endpoint URL
            api_key: Optional bearer token
            timeout: Request timeout in seconds
            client: Pre-built httpx client (tests inject one with a MockTransport)
        """
        self.url = url
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = headers

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ChatProxyClient:
        settings = settings or get_settings()
        return cls(
            url=settings.CHAT_PROXY_URL,
            api_key=settings.CHAT_PROXY_API_KEY.get_secret_value(),
            timeout=settings.CHAT_PROXY_TIMEOUT,
        )

    async def __aenter__(self) -> ChatProxyClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def complete(self, prompt: str, context: str) -> str:
        """Send one question and return the proxy's answer.

        Raises:
            RemoteFallbackError: Transport error, non-2xx status, or a body
                without a non-blank `response` string.
        """
        payload = {"prompt": prompt, "context": context}

        try:
            response = await self._client.post(self.url, json=payload, headers=self._headers)
        except httpx.TimeoutException as e:
            logger.error("Chat proxy timeout: %s", e)
            raise RemoteFallbackError(f"timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Chat proxy connection error: %s", e)
            raise RemoteFallbackError(f"transport: {e}") from e

        if not response.is_success:
            raise RemoteFallbackError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data: Any = response.json()
        except ValueError as e:
            raise RemoteFallbackError("malformed JSON body", status_code=response.status_code) from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise RemoteFallbackError("response field missing or blank", status_code=response.status_code)

        return text.strip()
