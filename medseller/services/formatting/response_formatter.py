"""Render matched products as the text blocks shown to the customer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from medseller.core.models import Product
from medseller.services.formatting.display import DefaultDisplay, DisplayHooks


DEFAULT_LIMIT = 5
BLOCK_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class ProductInfo:
    """Display-ready fields of one product."""

    name: str
    description: str
    price: str
    stock: str


class ResponseFormatter:
    """
    Formats products as

        Aspirin Plus - ₽149
        Fast relief from headaches, toothache and fever.
        Stock: In stock (42)

    with blocks separated by a blank line.
    """

    def __init__(self, display: DisplayHooks | None = None, default_limit: int = DEFAULT_LIMIT) -> None:
        self.display: DisplayHooks = display or DefaultDisplay()
        self.default_limit = default_limit

    @staticmethod
    def stock_phrase(product: Product) -> str:
        return f"In stock ({product.stock})" if product.in_stock else "Out of stock"

    def product_info(self, product: Product) -> ProductInfo:
        return ProductInfo(
            name=self.display.product_name(product),
            description=self.display.product_description(product),
            price=self.display.format_price(product.price),
            stock=self.stock_phrase(product),
        )

    def render_product(self, product: Product) -> str:
        info = self.product_info(product)
        lines = [f"{info.name} - {info.price}"]
        if info.description:
            lines.append(info.description)
        lines.append(f"Stock: {info.stock}")
        return "\n".join(lines)

    def render(self, products: Iterable[Product], limit: int | None = None) -> str:
        """Render at most `limit` products (default `default_limit`)."""
        max_count = self.default_limit if limit is None else limit
        blocks = []
        for product in products:
            if len(blocks) >= max_count:
                break
            blocks.append(self.render_product(product))
        return BLOCK_SEPARATOR.join(blocks)
