"""FastAPI dependency injection module.

Builds the assistant from settings at startup and exposes the objects kept
on `app.state` to routers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from medseller.conf.config import Settings
from medseller.core.fallbacks import FALLBACK_MESSAGES, FallbackType
from medseller.services.assistant import AssistantFacade, RemoteFallbackClient
from medseller.services.catalog import CatalogStore
from medseller.services.formatting import (
    DefaultDisplay,
    DisplayHooks,
    LocalizedDisplay,
    ResponseFormatter,
    load_translations,
)
from medseller.services.intents import IntentResolver, ResolverThresholds, load_intent_tables
from medseller.server.exceptions import CatalogUnavailableError


def build_display(settings: Settings) -> DisplayHooks:
    """Catalog text for 'en', translated names/descriptions otherwise."""
    default = DefaultDisplay(currency_symbol=settings.CURRENCY_SYMBOL)
    if settings.DISPLAY_LOCALE == "en":
        return default
    return LocalizedDisplay(
        locale=settings.DISPLAY_LOCALE,
        translations=load_translations(settings.translations_file, settings.DISPLAY_LOCALE),
        fallback=default,
    )


def build_assistant(
    store: CatalogStore,
    remote: RemoteFallbackClient | None,
    settings: Settings,
) -> AssistantFacade:
    display = build_display(settings)
    thresholds = ResolverThresholds.from_settings(settings)
    resolver = IntentResolver(
        store,
        formatter=ResponseFormatter(display, default_limit=thresholds.result_limit),
        tables=load_intent_tables(settings.intents_file),
        thresholds=thresholds,
    )
    return AssistantFacade(store, resolver, remote=remote, display=DefaultDisplay(settings.CURRENCY_SYMBOL))


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_assistant(request: Request) -> AssistantFacade:
    return request.app.state.assistant


def require_catalog(store: Annotated[CatalogStore, Depends(get_store)]) -> CatalogStore:
    """Reject catalog-backed requests while the store is in its load-error state."""
    if store.has_error():
        error = store.get_load_error()
        raise CatalogUnavailableError(
            FALLBACK_MESSAGES[FallbackType.CATALOG_EMPTY],
            detail=error.message if error else None,
        )
    return store


StoreDep = Annotated[CatalogStore, Depends(get_store)]
CatalogDep = Annotated[CatalogStore, Depends(require_catalog)]
AssistantDep = Annotated[AssistantFacade, Depends(get_assistant)]
