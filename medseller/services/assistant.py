"""
Assistant - local answers first, remote fallback second.
========================================================
`AssistantFacade.ask` tries the intent resolver; only an unresolved query
goes to the chat proxy, with a one-line-per-product catalog summary as
context. Remote failures never reach the caller: they become the static
medical advisory text.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, Protocol

from medseller.core.fallbacks import FallbackType, get_fallback_text
from medseller.core.logging import log_event, safe_preview
from medseller.core.models import Product
from medseller.services.catalog import CatalogStore
from medseller.services.exceptions import RemoteFallbackError
from medseller.services.formatting import DefaultDisplay, DisplayHooks
from medseller.services.intents import IntentResolver


logger = logging.getLogger(__name__)

ReplySource = Literal["local", "remote", "advisory"]


class RemoteFallbackClient(Protocol):
    """Anything that can answer a free-text question given catalog context."""

    async def complete(self, prompt: str, context: str) -> str: ...


@dataclass(frozen=True)
class AssistantReply:
    text: str
    source: ReplySource
    intent: str | None = None


def build_product_context(products: Iterable[Product], display: DisplayHooks | None = None) -> str:
    """One line per product: name | category | ingredient | price | Stock: n."""
    display = display or DefaultDisplay()
    return "\n".join(
        f"{p.name} | {p.category} | {p.active_ingredient} | {display.format_price(p.price)} | Stock: {p.stock}"
        for p in products
    )


class AssistantFacade:
    """Orchestrates the local resolver and the remote fallback."""

    def __init__(
        self,
        store: CatalogStore,
        resolver: IntentResolver,
        remote: RemoteFallbackClient | None = None,
        display: DisplayHooks | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._remote = remote
        self._display = display

    def _advisory(self, reason: str) -> AssistantReply:
        text = get_fallback_text(FallbackType.MEDICAL_ADVISORY, context={"reason": reason})
        return AssistantReply(text=text, source="advisory")

    async def answer(self, query: str) -> AssistantReply:
        start = time.perf_counter()
        intent, local = self._resolver.resolve_with_intent(query)
        if local:
            reply = AssistantReply(text=local, source="local", intent=intent)
        else:
            reply = await self._ask_remote(query)

        log_event(
            logger,
            event="assistant_answered",
            source=reply.source,
            intent=reply.intent,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return reply

    async def ask(self, query: str) -> str:
        """Answer `query`; always returns text."""
        return (await self.answer(query)).text

    async def _ask_remote(self, query: str) -> AssistantReply:
        if self._remote is None:
            return self._advisory("remote fallback not configured")

        context = build_product_context(self._store.get_products(), self._display)
        log_event(logger, event="remote_fallback_called", query_preview=safe_preview(query, 60))
        try:
            text = await self._remote.complete(query, context)
        except RemoteFallbackError as e:
            log_event(
                logger,
                event="remote_fallback_failed",
                level="warning",
                status_code=e.status_code,
                error=e.message,
            )
            return self._advisory(e.message)
        except Exception as e:
            logger.exception("Remote fallback raised unexpectedly: %s", e)
            return self._advisory(type(e).__name__)

        text = (text or "").strip()
        if not text:
            return self._advisory("empty remote response")
        return AssistantReply(text=text, source="remote")
