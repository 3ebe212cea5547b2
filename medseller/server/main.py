"""ASGI app exposing the catalog and the shopping assistant.

This module is a thin orchestrator that:
1. Loads the catalog and builds the assistant on startup
2. Includes routers for all endpoints
3. Maps API errors to JSON responses
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from medseller.conf.config import settings, validate_required_settings
from medseller.core.logging import setup_logging
from medseller.integrations.chat_proxy import ChatProxyClient
from medseller.server.dependencies import build_assistant
from medseller.server.exceptions import APIError
from medseller.server.routers import assistant_router, catalog_router, health_router
from medseller.services.catalog import CatalogStore, load_dataset
from medseller.services.exceptions import DatasetFormatError, NoDataError


logger = logging.getLogger(__name__)


def load_catalog() -> CatalogStore:
    """Load the configured dataset; a failure leaves the store in its error state."""
    try:
        records = load_dataset(settings.catalog_file)
    except DatasetFormatError as e:
        logger.critical("Catalog file is malformed: %s", e)
        records = []

    store = CatalogStore()
    try:
        store.load(records)
    except NoDataError as e:
        logger.critical("Catalog load failed, serving degraded: %s", e.message)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    setup_logging(
        level=settings.LOG_LEVEL,
        json_format=settings.LOG_JSON or settings.is_production,
        service_name="medseller",
    )

    try:
        validate_required_settings()
    except RuntimeError as e:
        logger.critical("Configuration validation failed: %s", e)
        raise

    logger.info("Starting MedSeller assistant")
    store = load_catalog()

    async with ChatProxyClient.from_settings(settings) as remote:
        app.state.store = store
        app.state.assistant = build_assistant(store, remote, settings)
        yield

    logger.info("MedSeller assistant stopped")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="MedSeller Assistant",
    description="Shopping assistant for an over-the-counter health store",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail or exc.message,
            "error": exc.message,
        },
    )


app.include_router(health_router)
app.include_router(catalog_router)
app.include_router(assistant_router)
