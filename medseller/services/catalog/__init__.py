from .catalog_store import ALL_CATEGORIES, CatalogStore
from .loader import load_dataset

__all__ = [
    "ALL_CATEGORIES",
    "CatalogStore",
    "load_dataset",
]
