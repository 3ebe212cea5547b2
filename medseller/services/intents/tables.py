"""
Intent Tables - keyword cues and lookup tables for the local intent engine.
==========================================================================

Loaded once from `data/intents.yaml` into an immutable `IntentTables`.
Table iteration order is file order, which is what first-match-wins relies on.

Version is read from a `# version: x.y` comment at the top of the file and
logged for observability.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from medseller.conf.config import get_settings


logger = logging.getLogger(__name__)

VERSION_PATTERN_YAML = re.compile(r"#\s*version:\s*([\d.]+)", re.IGNORECASE)

# Punctuation removed before a query is split into words
_PUNCTUATION = re.compile(r"[?!.,;:\"'()«»]+")

RESPONSE_KEYS = (
    "in_stock",
    "out_of_stock",
    "ingredient_table",
    "ingredient_sweep",
    "category",
    "all_categories",
    "price_cheap",
    "price_premium",
    "stock_summary",
    "condition",
    "search",
    "recommend",
    "help",
    "sweep",
)


def compile_strip_pattern(phrases: Iterable[str]) -> re.Pattern[str]:
    """Build a regex removing whole-word `phrases`.

    A phrase ending in `*` is a stem: it removes any word starting with it.
    """
    parts = []
    for phrase in phrases:
        phrase = phrase.strip().lower()
        if not phrase:
            continue
        if phrase.endswith("*"):
            parts.append(rf"(?<!\w){re.escape(phrase[:-1])}\w*")
        else:
            parts.append(rf"(?<!\w){re.escape(phrase)}(?!\w)")
    if not parts:
        return re.compile(r"(?!x)x")
    # Longest first so "do you have" wins over "have"
    parts.sort(key=len, reverse=True)
    return re.compile("|".join(parts))


def tokenize(text: str) -> list[str]:
    """Split on whitespace after dropping punctuation; never yields empty tokens."""
    return _PUNCTUATION.sub(" ", text).split()


def has_cue(query: str, cues: Iterable[str]) -> bool:
    return any(cue in query for cue in cues)


def _cues(section: Mapping[str, Any], key: str) -> tuple[str, ...]:
    return tuple(str(c).lower() for c in section.get(key) or ())


def _name_table(raw: Mapping[str, Any] | None) -> Mapping[str, tuple[str, ...]]:
    table = {}
    for key, names in (raw or {}).items():
        if isinstance(names, str):
            names = [names]
        table[str(key).lower()] = tuple(str(n) for n in names)
    return MappingProxyType(table)


@dataclass(frozen=True)
class IntentTables:
    """Immutable cue sets and tables consumed by the intent handlers."""

    availability_cues: tuple[str, ...]
    availability_strip: re.Pattern[str]
    stop_words: frozenset[str]
    ingredient_cues: tuple[str, ...]
    ingredient_table: Mapping[str, tuple[str, ...]]
    ingredient_scaffolding: frozenset[str]
    category_cues: tuple[str, ...]
    category_table: Mapping[str, str]
    all_categories_cues: tuple[str, ...]
    price_cues: tuple[str, ...]
    cheap_cues: tuple[str, ...]
    premium_cues: tuple[str, ...]
    stock_cues: tuple[str, ...]
    condition_table: Mapping[str, tuple[str, ...]]
    search_cues: tuple[str, ...]
    search_strip: re.Pattern[str]
    recommend_cues: tuple[str, ...]
    help_cues: tuple[str, ...]
    responses: Mapping[str, str]
    version: str = "1.0"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], version: str = "1.0") -> IntentTables:
        """Build tables from the parsed YAML document.

        Raises:
            ValueError: A response template is missing.
        """
        availability = data.get("availability") or {}
        ingredient = data.get("ingredient") or {}
        category = data.get("category") or {}
        price = data.get("price") or {}
        search = data.get("search") or {}
        responses = {str(k): str(v) for k, v in (data.get("responses") or {}).items()}

        missing = [key for key in RESPONSE_KEYS if key not in responses]
        if missing:
            raise ValueError(f"Intent tables missing response templates: {', '.join(missing)}")

        return cls(
            availability_cues=_cues(availability, "cues"),
            availability_strip=compile_strip_pattern(availability.get("strip") or ()),
            stop_words=frozenset(_cues(availability, "stop_words")),
            ingredient_cues=_cues(ingredient, "cues"),
            ingredient_table=_name_table(ingredient.get("table")),
            ingredient_scaffolding=frozenset(_cues(ingredient, "scaffolding")),
            category_cues=_cues(category, "cues"),
            category_table=MappingProxyType(
                {str(k).lower(): str(v) for k, v in (category.get("table") or {}).items()}
            ),
            all_categories_cues=_cues(category, "all_categories_cues"),
            price_cues=_cues(price, "cues"),
            cheap_cues=_cues(price, "cheap_cues"),
            premium_cues=_cues(price, "premium_cues"),
            stock_cues=_cues(data.get("stock") or {}, "cues"),
            condition_table=_name_table((data.get("conditions") or {}).get("table")),
            search_cues=_cues(search, "cues"),
            search_strip=compile_strip_pattern(search.get("strip") or ()),
            recommend_cues=_cues(data.get("recommend") or {}, "cues"),
            help_cues=_cues(data.get("help") or {}, "cues"),
            responses=MappingProxyType(responses),
            version=version,
        )


@lru_cache(maxsize=4)
def _load_tables(path: Path) -> IntentTables:
    with open(path, encoding="utf-8") as f:
        content = f.read()

    match = VERSION_PATTERN_YAML.search(content)
    version = match.group(1) if match else "1.0"
    tables = IntentTables.from_mapping(yaml.safe_load(content) or {}, version=version)
    logger.info(
        "Loaded intent tables v%s from %s (%d ingredients, %d categories, %d conditions)",
        version,
        path.name,
        len(tables.ingredient_table),
        len(tables.category_table),
        len(tables.condition_table),
    )
    return tables


def load_intent_tables(path: str | Path | None = None) -> IntentTables:
    """Load (cached) intent tables; defaults to the configured INTENTS_PATH."""
    resolved = Path(path) if path is not None else get_settings().intents_file
    return _load_tables(resolved.resolve())


def reload_intent_tables() -> None:
    """Force reload of intent tables (clears cache)."""
    _load_tables.cache_clear()
    logger.info("Intent tables cache cleared")
