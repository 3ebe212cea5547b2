"""
Display hooks.
==============
Presentation capabilities the formatter calls for a product's display name,
description and price. They are passed in explicitly; nothing here reads
global state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import yaml

from medseller.core.models import Product


logger = logging.getLogger(__name__)


class DisplayHooks(Protocol):
    """Localization and currency capability used by `ResponseFormatter`."""

    def product_name(self, product: Product) -> str: ...

    def product_description(self, product: Product) -> str: ...

    def format_price(self, amount: float) -> str: ...


def format_amount(amount: float) -> str:
    """Whole amounts print without decimals, others with two."""
    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}"


@dataclass(frozen=True)
class DefaultDisplay:
    """Raw catalog text with a fixed currency symbol, e.g. "₽149"."""

    currency_symbol: str = "₽"

    def product_name(self, product: Product) -> str:
        return product.name

    def product_description(self, product: Product) -> str:
        return product.description

    def format_price(self, amount: float) -> str:
        return f"{self.currency_symbol}{format_amount(amount)}"


@dataclass(frozen=True)
class LocalizedDisplay:
    """
    Per-locale names and descriptions, looked up by product id.

    Products or fields without a translation fall back to `fallback`.
    """

    locale: str
    translations: Mapping[int, Mapping[str, str]] = field(default_factory=dict)
    fallback: DefaultDisplay = field(default_factory=DefaultDisplay)

    def _lookup(self, product: Product, key: str) -> str | None:
        entry = self.translations.get(product.id) or {}
        return entry.get(key) or None

    def product_name(self, product: Product) -> str:
        return self._lookup(product, "name") or self.fallback.product_name(product)

    def product_description(self, product: Product) -> str:
        return self._lookup(product, "description") or self.fallback.product_description(product)

    def format_price(self, amount: float) -> str:
        return self.fallback.format_price(amount)


def load_translations(path: str | Path, locale: str) -> dict[int, dict[str, str]]:
    """Read one locale from a translations file keyed by product id.

    A missing file or locale gives an empty mapping.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Translations file not found at %s", path)
        return {}

    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    entries = data.get(locale) or {}
    if not entries:
        logger.warning("No translations for locale %r in %s", locale, path.name)
    return {
        int(product_id): {k: str(v) for k, v in (fields or {}).items()}
        for product_id, fields in entries.items()
    }
