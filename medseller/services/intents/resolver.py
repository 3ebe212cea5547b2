"""
Intent Resolver - local, deterministic answer engine.
=====================================================
Evaluates the ordered handler table against a normalized query and returns
the first handler's answer. `None` means no local match; the caller then
asks the remote fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from medseller.core.logging import log_event, safe_preview
from medseller.services.catalog import CatalogStore
from medseller.services.formatting import ResponseFormatter
from medseller.services.intents.handlers import (
    DEFAULT_HANDLERS,
    IntentHandler,
    ResolverContext,
    ResolverThresholds,
)
from medseller.services.intents.tables import IntentTables, load_intent_tables


logger = logging.getLogger(__name__)


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


class IntentResolver:
    """
    Short-circuiting decision list over keyword cues.

    Reads the full catalog (never the store's current view), so resolving a
    query does not disturb what a caller has searched or sorted.
    """

    def __init__(
        self,
        store: CatalogStore,
        formatter: ResponseFormatter | None = None,
        tables: IntentTables | None = None,
        thresholds: ResolverThresholds | None = None,
        handlers: Sequence[IntentHandler] = DEFAULT_HANDLERS,
    ) -> None:
        self._store = store
        self._thresholds = thresholds or ResolverThresholds()
        self._formatter = formatter or ResponseFormatter(default_limit=self._thresholds.result_limit)
        self._tables = tables or load_intent_tables()
        self._handlers = tuple(handlers)

    @property
    def handlers(self) -> tuple[IntentHandler, ...]:
        return self._handlers

    @property
    def thresholds(self) -> ResolverThresholds:
        return self._thresholds

    def _context(self) -> ResolverContext:
        return ResolverContext(
            products=self._store.get_products(),
            categories=self._store.get_categories(),
            tables=self._tables,
            formatter=self._formatter,
            thresholds=self._thresholds,
        )

    def resolve_with_intent(self, query: str | None) -> tuple[str | None, str | None]:
        """Return `(intent_name, answer)`, or `(None, None)` when no handler answers."""
        q = normalize_query(query)
        if not q:
            return None, None

        ctx = self._context()
        for handler in self._handlers:
            if not handler.trigger(q, self._tables):
                continue
            match = handler.lookup(q, ctx)
            if match is None:
                logger.debug("Handler %s triggered without a match", handler.name)
                continue
            answer = handler.render(match, ctx)
            if answer:
                log_event(
                    logger,
                    event="intent_matched",
                    intent=handler.name,
                    products_count=len(match.products),
                    query_preview=safe_preview(q, 60),
                )
                return handler.name, answer

        log_event(logger, event="intent_no_match", query_preview=safe_preview(q, 60))
        return None, None

    def resolve(self, query: str | None) -> str | None:
        """Answer `query` locally, or return None for no local match."""
        return self.resolve_with_intent(query)[1]
