import sys
from pathlib import Path

import pytest


# Add project root to path
root = Path(__file__).resolve().parents[1]
project_root = str(root)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from medseller.services.catalog import CatalogStore, load_dataset  # noqa: E402
from medseller.services.formatting import ResponseFormatter  # noqa: E402
from medseller.services.intents import (  # noqa: E402
    IntentResolver,
    ResolverThresholds,
    load_intent_tables,
)


# Setup Paths
DATA_DIR = root / "data"
CATALOG_PATH = DATA_DIR / "products.json"
INTENTS_PATH = DATA_DIR / "intents.yaml"
TRANSLATIONS_PATH = DATA_DIR / "translations.yaml"


@pytest.fixture()
def catalog_records() -> list[dict]:
    """The bundled twelve-product catalog."""
    return load_dataset(CATALOG_PATH)


@pytest.fixture()
def three_records() -> list[dict]:
    """Small catalog with one out-of-stock product."""
    return [
        {
            "id": 1,
            "name": "Aspirin Plus",
            "category": "Pain Relief",
            "active_ingredient": "Acetylsalicylic acid",
            "description": "Fast relief from headaches.",
            "price": 149,
            "stock": 42,
        },
        {
            "id": 2,
            "name": "Melatonin Sleep Aid",
            "category": "Sleep & Relaxation",
            "active_ingredient": "Melatonin 3 mg",
            "description": "Helps you fall asleep faster.",
            "price": 320,
            "stock": 0,
        },
        {
            "id": 3,
            "name": "Magnesium Glycinate",
            "category": "Sleep & Relaxation",
            "active_ingredient": "Magnesium glycinate 400 mg",
            "description": "Gentle mineral support for muscle recovery.",
            "price": 540,
            "stock": 25,
        },
    ]


@pytest.fixture()
def store(catalog_records) -> CatalogStore:
    catalog = CatalogStore()
    catalog.load(catalog_records)
    return catalog


@pytest.fixture()
def small_store(three_records) -> CatalogStore:
    catalog = CatalogStore()
    catalog.load(three_records)
    return catalog


@pytest.fixture()
def tables():
    return load_intent_tables(INTENTS_PATH)


@pytest.fixture()
def thresholds() -> ResolverThresholds:
    return ResolverThresholds()


@pytest.fixture()
def resolver(store, tables, thresholds) -> IntentResolver:
    return IntentResolver(store, formatter=ResponseFormatter(), tables=tables, thresholds=thresholds)


@pytest.fixture()
def small_resolver(small_store, tables, thresholds) -> IntentResolver:
    return IntentResolver(small_store, formatter=ResponseFormatter(), tables=tables, thresholds=thresholds)
