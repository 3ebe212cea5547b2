"""
Intent Resolver Tests
=====================

End-to-end behavior of the ordered decision list over the bundled catalog.
"""

import pytest

from medseller.services.catalog import CatalogStore
from medseller.services.intents import HandlerMatch, IntentHandler, IntentResolver, normalize_query


class TestAvailability:
    def test_in_stock_reports_quantity(self, resolver):
        intent, text = resolver.resolve_with_intent("Do you have Aspirin?")

        assert intent == "availability"
        assert text == (
            "Yes! Aspirin Plus is in stock. We have 42 units available.\n\n"
            "Price: ₽149\n"
            "Fast relief from headaches, toothache and fever."
        )

    def test_out_of_stock_offers_alternatives(self, resolver):
        text = resolver.resolve("do you have melatonin")

        assert text.startswith("Sorry, Melatonin Sleep Aid is currently out of stock.")
        assert "Price: ₽320" in text
        assert text.endswith("Would you like me to show you similar products?")

    def test_availability_beats_price(self, resolver):
        intent, text = resolver.resolve_with_intent("do you have aspirin, what is the price?")

        assert intent == "availability"
        assert "Aspirin Plus is in stock" in text

    def test_unmatched_availability_falls_through_to_stock_summary(self, resolver):
        intent, text = resolver.resolve_with_intent("what's in stock?")

        assert intent == "stock_summary"
        assert "• 10 products in stock" in text
        assert "• 2 products out of stock" in text


class TestListIntents:
    def test_ingredient_lookup_returns_single_product(self, resolver):
        intent, text = resolver.resolve_with_intent("what contains magnesium")

        assert intent == "ingredient"
        assert text.startswith("Products containing magnesium:")
        assert text.count(" - ₽") == 1
        assert "Magnesium Glycinate - ₽540" in text

    def test_ingredient_table_ignores_loose_mentions(self, three_records, tables):
        decoy = {
            "id": 4,
            "name": "Chamomile Night Tea",
            "category": "Sleep & Relaxation",
            "active_ingredient": "Chamomile flower",
            "description": "Pairs well with magnesium before bed.",
            "price": 210,
            "stock": 9,
        }
        store = CatalogStore()
        store.load(three_records + [decoy])
        resolver = IntentResolver(store, tables=tables)

        intent, text = resolver.resolve_with_intent("what contains magnesium")

        assert intent == "ingredient"
        assert text.count(" - ₽") == 1
        assert "Magnesium Glycinate - ₽540" in text
        assert "Chamomile" not in text

    def test_ingredient_code(self, resolver):
        intent, text = resolver.resolve_with_intent("what contains d3")

        assert intent == "ingredient"
        assert text.startswith("Products with those ingredients:")
        assert "Vitamin D3 Supreme" in text

    def test_category(self, resolver):
        intent, text = resolver.resolve_with_intent("show me sleep products")

        assert intent == "category"
        assert text.startswith("Here are our Sleep & Relaxation products:")
        assert "Melatonin Sleep Aid" in text
        assert "Magnesium Glycinate" in text

    def test_cheap_products(self, resolver):
        intent, text = resolver.resolve_with_intent("cheap price")

        assert intent == "price_tier"
        assert text.index("Aspirin Plus") < text.index("Zinc Immune Support")

    def test_premium_products_are_truncated(self, resolver):
        text = resolver.resolve("expensive price")

        assert text.startswith("Here are our premium products:")
        assert text.count(" - ₽") == 5

    def test_health_condition(self, resolver):
        intent, text = resolver.resolve_with_intent("something for a headache")

        assert intent == "health_condition"
        assert text.startswith("For headache, I recommend:")
        assert "Aspirin Plus" in text

    def test_search(self, resolver):
        intent, text = resolver.resolve_with_intent("find fish oil")

        assert intent == "search"
        assert text.startswith("I found 1 product(s) matching your search:")

    def test_recommendation_lists_featured_products(self, resolver):
        intent, text = resolver.resolve_with_intent("what do you recommend?")

        assert intent == "recommendation"
        for name in ("Aspirin Plus", "Vitamin D3 Supreme", "Omega-3 Complete"):
            assert name in text

    def test_help(self, resolver, tables):
        assert resolver.resolve_with_intent("help") == ("help", tables.responses["help"])

    def test_generic_sweep_is_capped(self, resolver):
        intent, text = resolver.resolve_with_intent("supports")

        assert intent == "generic_sweep"
        assert text.startswith("Here's what I found:")
        assert text.count(" - ₽") == 3


class TestNoMatch:
    @pytest.mark.parametrize("query", ["", "   ", None, "xyzzy", "price"])
    def test_returns_none(self, resolver, query):
        assert resolver.resolve_with_intent(query) == (None, None)
        assert resolver.resolve(query) is None


def test_three_product_catalog(small_resolver):
    in_stock = small_resolver.resolve("is magnesium in stock?")
    out_of_stock = small_resolver.resolve("do you have melatonin")

    assert "We have 25 units available." in in_stock
    assert "Gentle mineral support for muscle recovery." in in_stock
    assert "Sorry, Melatonin Sleep Aid is currently out of stock." in out_of_stock
    assert "Helps you fall asleep faster." in out_of_stock


def test_resolving_keeps_current_view(store, resolver):
    view = store.filter_by_category("Joint Health")

    resolver.resolve("show me sleep products")

    assert store.get_filtered() == view


def test_query_is_normalized():
    assert normalize_query("  Do You HAVE Zinc ") == "do you have zinc"
    assert normalize_query(None) == ""


def test_handler_order_is_inspectable(resolver):
    names = tuple(h.name for h in resolver.handlers)

    assert names[0] == "availability"
    assert names[-1] == "generic_sweep"
    assert names.index("stock_summary") < names.index("search")


def test_custom_handlers(store, tables):
    calls = []

    def trigger(query, _tables):
        calls.append(query)
        return query.startswith("ping")

    pong = IntentHandler(
        name="ping",
        trigger=trigger,
        lookup=lambda query, ctx: HandlerMatch(template="help"),
        render=lambda match, ctx: "pong",
    )
    resolver = IntentResolver(store, tables=tables, handlers=[pong])

    assert resolver.resolve_with_intent("PING") == ("ping", "pong")
    assert resolver.resolve("hello") is None
    assert calls == ["ping", "hello"]
