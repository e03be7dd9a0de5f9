"""
Equipment catalog loading from exported Foundry VTT pf2e item documents.

Each JSON file holds one item document. Files that cannot be read, are not
valid JSON, or do not describe a usable item are skipped with a warning so a
single bad export never aborts a generation run.
"""

import json
import logging
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vendor_tables.exceptions import CatalogError
from vendor_tables.models import ItemRecord

log = logging.getLogger(__name__)

# Copper pieces per coin
_COIN_VALUES = {"pp": 1000, "gp": 100, "sp": 10, "cp": 1}


def price_to_copper(price: dict[str, Any] | None) -> int:
    if price is None:
        return 0
    if not isinstance(price, dict):
        raise ValueError(f"Expected a coin mapping for price, got {type(price).__name__}")
    total = 0.0
    for coin, value in _COIN_VALUES.items():
        amount = price.get(coin) or 0
        total += float(amount) * value
    return round(total)


def nested_value(data: dict[str, Any], *keys: str) -> Any:
    value: Any = data
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
        if value is None:
            return None
    return value


def tag_set(value: Any, field: str) -> frozenset[str]:
    """Read a list of string tags, rejecting bare strings and other shapes."""
    if value is None:
        return frozenset()
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise ValueError(f"Expected a list of strings for {field}, got {value!r}")
    return frozenset(value)


def parse_item(data: dict[str, Any]) -> ItemRecord:
    """
    Map an exported item document onto an ItemRecord.

    Missing nested values default to level 0, rarity common, no traits and a
    price of 0, matching how the pf2e system treats absent data.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected an item document object, got {type(data).__name__}")

    return ItemRecord(
        id=data.get("_id"),
        name=data.get("name"),
        img=data.get("img"),
        type=data.get("type"),
        level=nested_value(data, "system", "level", "value") or 0,
        rarity=nested_value(data, "system", "traits", "rarity") or "common",
        traits=tag_set(nested_value(data, "system", "traits", "value"), "traits.value"),
        category=nested_value(data, "system", "category") or None,
        price_cp=price_to_copper(nested_value(data, "system", "price", "value")),
    )


def load_catalog(directory: Path) -> list[ItemRecord]:
    if not directory.is_dir():
        raise CatalogError(f"Catalog directory not found: {directory}")

    items: list[ItemRecord] = []
    skipped = 0
    for path in sorted(directory.rglob("*.json")):
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
            items.append(parse_item(data))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            log.warning("Skipping %s: unreadable (%s)", path.name, e)
            skipped += 1
        except (ValidationError, ValueError, TypeError) as e:
            log.warning("Skipping %s: not a valid item (%s)", path.name, _first_line(e))
            skipped += 1

    log.info("Loaded %d item(s) from %s (%d skipped)", len(items), directory, skipped)
    return items


def rarity_breakdown(items: Iterable[ItemRecord]) -> dict[str, int]:
    counts = Counter(item.rarity for item in items)
    return dict(sorted(counts.items()))


def _first_line(error: Exception) -> str:
    return str(error).splitlines()[0] if str(error) else type(error).__name__
