"""Health check router."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from medseller.server.dependencies import StoreDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: StoreDep) -> dict[str, Any]:
    """Report catalog status; a failed load shows as degraded."""
    error = store.get_load_error()
    return {
        "status": "degraded" if error else "ok",
        "products": len(store.get_products()),
        "error": error.message if error else None,
    }
