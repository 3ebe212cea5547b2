"""
Catalog Store - in-memory product catalog.
==========================================
Owns the product list loaded once per session and a mutable "current view"
derived from it by search, category filter and sort.

Concurrency: the view is a plain field, last writer wins. One session drives
one store; callers sharing a store must serialize their calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from medseller.core.logging import log_event
from medseller.core.models import TEXT_FIELDS, Product
from medseller.services.exceptions import NoDataError


logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

_SORT_KEYS: dict[str, Callable[[Product], Any]] = {
    "name": lambda p: p.name.casefold(),
    "price": lambda p: p.price,
}


class CatalogStore:
    """
    Product catalog with search, category filter and sort over a current view.

    `load` must succeed before the store is used. Snapshots are returned as
    tuples so callers cannot mutate the store through them.
    """

    def __init__(self) -> None:
        self._products: list[Product] = []
        self._filtered: list[Product] = []
        self._categories: list[str] = []
        self._load_error: NoDataError | None = None

    # =========================================================================
    # LOAD
    # =========================================================================

    def load(self, source: Sequence[Mapping[str, Any] | Product] | None) -> tuple[Product, ...]:
        """Populate the catalog from an in-memory dataset.

        Invalid records and duplicate ids are skipped with a warning.

        Raises:
            NoDataError: The dataset is absent, empty, or has no valid record.
        """
        products = self._validate(source or [])
        if not products:
            self._products = []
            self._filtered = []
            self._categories = []
            self._load_error = NoDataError(
                "No product data available" if not source else "Dataset has no valid product records"
            )
            log_event(logger, event="catalog_load_failed", level="critical", error=self._load_error.message)
            raise self._load_error

        self._products = products
        self._load_error = None
        self._filtered = list(self._products)
        self._categories = sorted({p.category for p in self._products if p.category})
        log_event(
            logger,
            event="catalog_loaded",
            products_count=len(self._products),
            categories=len(self._categories),
        )
        return tuple(self._products)

    @staticmethod
    def _validate(source: Sequence[Mapping[str, Any] | Product]) -> list[Product]:
        products: list[Product] = []
        seen_ids: set[int] = set()
        for index, record in enumerate(source):
            try:
                product = record if isinstance(record, Product) else Product.model_validate(record)
            except ValidationError as e:
                logger.warning(
                    "[CATALOG] Skipping record #%d: %d validation error(s): %s",
                    index,
                    e.error_count(),
                    e.errors()[0]["msg"],
                )
                continue
            if product.id in seen_ids:
                logger.warning("[CATALOG] Skipping record #%d: duplicate id=%d", index, product.id)
                continue
            seen_ids.add(product.id)
            products.append(product)
        return products

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def get_products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    def get_filtered(self) -> tuple[Product, ...]:
        """The current view."""
        return tuple(self._filtered)

    def get_categories(self) -> tuple[str, ...]:
        return tuple(self._categories)

    def get_load_error(self) -> NoDataError | None:
        return self._load_error

    def has_error(self) -> bool:
        return self._load_error is not None

    # =========================================================================
    # VIEW OPERATIONS
    # =========================================================================

    def search(self, query: str | None) -> tuple[Product, ...]:
        """Restrict the view to products whose text fields contain `query`.

        An empty query resets the view to the full catalog.
        """
        q = (query or "").strip().lower()
        if not q:
            self._filtered = list(self._products)
        else:
            self._filtered = [p for p in self._products if p.mentions(q, TEXT_FIELDS)]
        return self.get_filtered()

    def filter_by_category(self, category: str | None) -> tuple[Product, ...]:
        """Restrict the view to an exact category; "" or "all" resets it."""
        if not category or category == ALL_CATEGORIES:
            self._filtered = list(self._products)
        else:
            self._filtered = [p for p in self._products if p.category == category]
        return self.get_filtered()

    def sort_by(self, key: str, order: str = "asc") -> tuple[Product, ...]:
        """Reorder the current view by "name" or "price".

        Unknown keys leave the view unchanged.
        """
        sort_key = _SORT_KEYS.get(key)
        if sort_key is None:
            logger.debug("[CATALOG] Ignoring unknown sort key %r", key)
            return self.get_filtered()
        self._filtered = sorted(self._filtered, key=sort_key, reverse=order == "desc")
        return self.get_filtered()
