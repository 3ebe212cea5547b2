"""Typed contracts shared by the catalog, the intent engine and the server.

`Product` is the single product shape used everywhere. Dataset records are
validated into it once at load time, so downstream code never has to guard
against missing text fields.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Fields scanned by catalog text search, in match order
TEXT_FIELDS: tuple[str, ...] = ("name", "description", "active_ingredient", "category")


class Product(BaseModel):
    """
    Product as loaded from the dataset and exposed to clients.

    Text fields default to "" (a missing or null value is never an error);
    price and stock are non-negative.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., gt=0, description="Product ID, unique within the catalog")
    name: str = ""
    category: str = ""
    active_ingredient: str = ""
    description: str = ""
    price: float = Field(default=0.0, ge=0)
    stock: int = Field(default=0, ge=0)

    @field_validator("name", "category", "active_ingredient", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def mentions(self, term: str, fields: Iterable[str] = TEXT_FIELDS) -> bool:
        """Case-insensitive substring test of `term` against the given fields.

        An empty term matches nothing.
        """
        term = term.lower()
        if not term:
            return False
        return any(term in getattr(self, name).lower() for name in fields)

    def mentions_any(self, terms: Iterable[str], fields: Iterable[str] = TEXT_FIELDS) -> bool:
        fields = tuple(fields)
        return any(self.mentions(term, fields) for term in terms)
