"""Catalog browsing router (search, category filter, sort)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from medseller.server.dependencies import CatalogDep
from medseller.services.catalog import ALL_CATEGORIES

router = APIRouter(tags=["catalog"])


@router.get("/products")
async def list_products(
    store: CatalogDep,
    q: str | None = None,
    category: str | None = None,
    sort: str | None = None,
    order: str = "asc",
) -> dict[str, Any]:
    """Browse the catalog.

    A text query sets the view by search; otherwise the category does. With
    both, the sorted search result is narrowed to the category. The store
    calls run back to back without awaiting, so requests cannot interleave.
    """
    if q or not category:
        store.search(q)
    else:
        store.filter_by_category(category)
    if sort:
        store.sort_by(sort, order)

    view = store.get_filtered()
    if q and category and category != ALL_CATEGORIES:
        view = tuple(p for p in view if p.category == category)
    return {
        "count": len(view),
        "products": [p.model_dump() for p in view],
    }


@router.get("/categories")
async def list_categories(store: CatalogDep) -> dict[str, Any]:
    return {"categories": list(store.get_categories())}
