"""
Dataset loader.
===============
Reads the raw product records that `CatalogStore.load` validates.

Supports JSON and YAML files holding either a list of records or an object
with a `products` list. A missing file yields an empty list so the store can
report `NoDataError` itself.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from medseller.services.exceptions import DatasetFormatError


logger = logging.getLogger(__name__)


def load_dataset(path: str | Path) -> list[dict[str, Any]]:
    """Read product records from `path`.

    Raises:
        DatasetFormatError: The file parses but does not hold a list of records.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("[CATALOG] Dataset not found at %s", path)
        return []

    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise DatasetFormatError(str(path), f"invalid JSON ({e.msg})") from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("products", [])
    if not isinstance(data, list):
        raise DatasetFormatError(str(path), f"expected a list, got {type(data).__name__}")

    records = [row for row in data if isinstance(row, dict)]
    if len(records) != len(data):
        logger.warning(
            "[CATALOG] Ignored %d non-object entries in %s",
            len(data) - len(records),
            path.name,
        )
    return records
