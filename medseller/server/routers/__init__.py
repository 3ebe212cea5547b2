"""Routers package for the MedSeller server."""

from medseller.server.routers.assistant import router as assistant_router
from medseller.server.routers.catalog import router as catalog_router
from medseller.server.routers.health import router as health_router

__all__ = [
    "assistant_router",
    "catalog_router",
    "health_router",
]
