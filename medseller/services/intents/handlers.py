"""
Intent handlers - one (trigger, lookup, render) triple per intent.
==================================================================

- trigger(query, tables) -> bool: cheap keyword test on the normalized query
- lookup(query, context) -> HandlerMatch | None: catalog lookup; None passes
  the query on to the next handler
- render(match, context) -> str: final text

`DEFAULT_HANDLERS` fixes evaluation order. Availability comes before the
broader stock summary and before free-text search; the overlap between their
cues is resolved purely by this order.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from medseller.core.models import TEXT_FIELDS, Product
from medseller.services.formatting import ResponseFormatter
from medseller.services.intents.tables import IntentTables, has_cue, tokenize


PRODUCT_FIELDS = ("name", "description", "active_ingredient")
INGREDIENT_FIELDS = ("active_ingredient", "name")
INGREDIENT_MIN_TERM_LENGTH = 2


@dataclass(frozen=True)
class ResolverThresholds:
    """Catalog-tuning constants; see the matching Settings fields."""

    cheap_price: float = 200
    premium_price: float = 500
    result_limit: int = 5
    sweep_limit: int = 3
    featured_max_id: int = 3
    min_term_length: int = 3

    @classmethod
    def from_settings(cls, settings: Any) -> ResolverThresholds:
        return cls(
            cheap_price=settings.PRICE_CHEAP_THRESHOLD,
            premium_price=settings.PRICE_PREMIUM_THRESHOLD,
            result_limit=settings.RESULT_LIMIT,
            sweep_limit=settings.SWEEP_RESULT_LIMIT,
            featured_max_id=settings.FEATURED_MAX_ID,
            min_term_length=settings.MIN_TERM_LENGTH,
        )


@dataclass(frozen=True)
class ResolverContext:
    """Everything a handler may read while resolving one query."""

    products: tuple[Product, ...]
    categories: tuple[str, ...]
    tables: IntentTables
    formatter: ResponseFormatter
    thresholds: ResolverThresholds


@dataclass(frozen=True)
class HandlerMatch:
    """Result of a successful lookup.

    `template` names the response template; `subject` fills `{subject}`.
    """

    template: str
    products: tuple[Product, ...] = ()
    subject: str = ""
    limit: int | None = None
    details: Mapping[str, Any] = field(default_factory=dict)


Trigger = Callable[[str, IntentTables], bool]
Lookup = Callable[[str, ResolverContext], HandlerMatch | None]
Render = Callable[[HandlerMatch, ResolverContext], str]


@dataclass(frozen=True)
class IntentHandler:
    name: str
    trigger: Trigger
    lookup: Lookup
    render: Render


def _terms(text: str, min_length: int, exclude: frozenset[str] = frozenset()) -> list[str]:
    return [t for t in tokenize(text) if len(t) >= min_length and t not in exclude]


def _matching(products: tuple[Product, ...], terms: list[str], fields: tuple[str, ...]) -> tuple[Product, ...]:
    if not terms:
        return ()
    return tuple(p for p in products if p.mentions_any(terms, fields))


def _named(products: tuple[Product, ...], names: tuple[str, ...]) -> tuple[Product, ...]:
    """Products whose name contains one of the canonical names (case-sensitive)."""
    return tuple(p for p in products if any(name in p.name for name in names))


def render_list(match: HandlerMatch, ctx: ResolverContext) -> str:
    """Fill a list template with the formatted products."""
    limit = match.limit if match.limit is not None else ctx.thresholds.result_limit
    return ctx.tables.responses[match.template].format(
        subject=match.subject,
        count=len(match.products),
        products=ctx.formatter.render(match.products, limit=limit),
        **match.details,
    )


# =============================================================================
# 1. AVAILABILITY ("do you have X", "is X in stock")
# =============================================================================


def availability_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.availability_cues)


def availability_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    cleaned = ctx.tables.availability_strip.sub(" ", query)
    terms = _terms(cleaned, ctx.thresholds.min_term_length, ctx.tables.stop_words)
    if not terms:
        return None
    for product in ctx.products:
        if product.mentions_any(terms, PRODUCT_FIELDS):
            return HandlerMatch(
                template="in_stock" if product.in_stock else "out_of_stock",
                products=(product,),
            )
    return None


def availability_render(match: HandlerMatch, ctx: ResolverContext) -> str:
    product = match.products[0]
    info = ctx.formatter.product_info(product)
    return ctx.tables.responses[match.template].format(
        name=info.name,
        stock=product.stock,
        price=info.price,
        description=info.description,
    )


# =============================================================================
# 2. INGREDIENT ("what contains magnesium")
# =============================================================================


def ingredient_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.ingredient_cues)


def ingredient_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    for ingredient, names in ctx.tables.ingredient_table.items():
        if ingredient not in query:
            continue
        matched = tuple(
            p
            for p in ctx.products
            if any(name in p.name for name in names) or ingredient in p.active_ingredient.lower()
        )
        if matched:
            return HandlerMatch(template="ingredient_table", products=matched, subject=ingredient)

    # Ingredient codes such as "d3" or "b6" are two characters long
    terms = _terms(query, INGREDIENT_MIN_TERM_LENGTH, ctx.tables.ingredient_scaffolding)
    matched = _matching(ctx.products, terms, INGREDIENT_FIELDS)
    if matched:
        return HandlerMatch(template="ingredient_sweep", products=matched)
    return None


# =============================================================================
# 3. CATEGORY ("show me sleep products", "all categories")
# =============================================================================


def category_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.category_cues)


def category_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    for key, category in ctx.tables.category_table.items():
        if key not in query:
            continue
        matched = tuple(p for p in ctx.products if p.category == category)
        if matched:
            return HandlerMatch(template="category", products=matched, subject=category)

    if has_cue(query, ctx.tables.all_categories_cues) and ctx.categories:
        return HandlerMatch(
            template="all_categories",
            details={"categories": "\n".join(f"• {c}" for c in ctx.categories)},
        )
    return None


def category_render(match: HandlerMatch, ctx: ResolverContext) -> str:
    if match.template == "all_categories":
        return ctx.tables.responses["all_categories"].format(**match.details)
    return render_list(match, ctx)


# =============================================================================
# 4. PRICE TIER ("cheap price", "premium cost")
# =============================================================================


def price_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.price_cues)


def price_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    if has_cue(query, ctx.tables.cheap_cues):
        cheap = sorted(
            (p for p in ctx.products if p.price < ctx.thresholds.cheap_price),
            key=lambda p: p.price,
        )
        if cheap:
            return HandlerMatch(template="price_cheap", products=tuple(cheap))

    if has_cue(query, ctx.tables.premium_cues):
        premium = sorted(
            (p for p in ctx.products if p.price > ctx.thresholds.premium_price),
            key=lambda p: p.price,
            reverse=True,
        )
        if premium:
            return HandlerMatch(template="price_premium", products=tuple(premium))
    return None


# =============================================================================
# 5. STOCK SUMMARY ("what is in stock")
# =============================================================================


def stock_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.stock_cues)


def stock_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    in_stock = tuple(p for p in ctx.products if p.in_stock)
    return HandlerMatch(
        template="stock_summary",
        products=in_stock,
        details={"in_stock": len(in_stock), "out_of_stock": len(ctx.products) - len(in_stock)},
    )


# =============================================================================
# 6. HEALTH CONDITION (keyword sweep, no trigger cue)
# =============================================================================


def always(query: str, tables: IntentTables) -> bool:
    return True


def condition_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    for condition, names in ctx.tables.condition_table.items():
        if condition not in query:
            continue
        matched = _named(ctx.products, names)
        if matched:
            return HandlerMatch(template="condition", products=matched, subject=condition)
    return None


# =============================================================================
# 7. FREE-TEXT SEARCH ("find something for sleep")
# =============================================================================


def search_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.search_cues)


def search_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    cleaned = ctx.tables.search_strip.sub(" ", query)
    matched = _matching(ctx.products, _terms(cleaned, ctx.thresholds.min_term_length), PRODUCT_FIELDS)
    if matched:
        return HandlerMatch(template="search", products=matched)
    return None


# =============================================================================
# 8. RECOMMENDATION ("what do you recommend")
# =============================================================================


def recommend_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.recommend_cues)


def recommend_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    featured = tuple(p for p in ctx.products if p.id <= ctx.thresholds.featured_max_id)
    if featured:
        return HandlerMatch(template="recommend", products=featured)
    return None


# =============================================================================
# 9. HELP
# =============================================================================


def help_trigger(query: str, tables: IntentTables) -> bool:
    return has_cue(query, tables.help_cues)


def help_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    return HandlerMatch(template="help")


def static_render(match: HandlerMatch, ctx: ResolverContext) -> str:
    return ctx.tables.responses[match.template]


# =============================================================================
# 10. GENERIC SWEEP (last resort)
# =============================================================================


def sweep_lookup(query: str, ctx: ResolverContext) -> HandlerMatch | None:
    matched = _matching(ctx.products, _terms(query, ctx.thresholds.min_term_length), TEXT_FIELDS)
    if matched:
        return HandlerMatch(template="sweep", products=matched, limit=ctx.thresholds.sweep_limit)
    return None


DEFAULT_HANDLERS: tuple[IntentHandler, ...] = (
    IntentHandler("availability", availability_trigger, availability_lookup, availability_render),
    IntentHandler("ingredient", ingredient_trigger, ingredient_lookup, render_list),
    IntentHandler("category", category_trigger, category_lookup, category_render),
    IntentHandler("price_tier", price_trigger, price_lookup, render_list),
    IntentHandler("stock_summary", stock_trigger, stock_lookup, render_list),
    IntentHandler("health_condition", always, condition_lookup, render_list),
    IntentHandler("search", search_trigger, search_lookup, render_list),
    IntentHandler("recommendation", recommend_trigger, recommend_lookup, render_list),
    IntentHandler("help", help_trigger, help_lookup, static_render),
    IntentHandler("generic_sweep", always, sweep_lookup, render_list),
)
