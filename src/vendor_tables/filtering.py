"""
Catalog filtering against vendor partition criteria.

Two matching modes, selected by the criteria type:

- FixedInclusionCriteria: explicit inclusion lists (exact names or name
  substrings) bounded by level and optionally restricted to common items.
- RotatingCriteria: category-driven matching on level range, rarity, item type,
  price, traits and category, with a name-marker override for items the trait
  and category metadata does not describe well (wands, staves, scrolls).
"""

import logging
from collections.abc import Iterable

from vendor_tables.exceptions import CriteriaError
from vendor_tables.models import (
    GRADE_SUFFIXES,
    Criteria,
    FixedInclusionCriteria,
    ItemRecord,
    RotatingCriteria,
)

log = logging.getLogger(__name__)

_LOW_GRADES = {"lesser"}


def item_grade(name: str) -> str:
    lower_name = name.lower()
    for suffix, grade in GRADE_SUFFIXES.items():
        if suffix in lower_name:
            return grade
    return "base"


def matches_fixed(item: ItemRecord, criteria: FixedInclusionCriteria) -> bool:
    if criteria.rarity_required and item.rarity != "common":
        return False

    if item.level > criteria.level_max:
        return False

    if item.name in criteria.name_exact_set:
        return True

    return any(pattern in item.name for pattern in criteria.name_pattern_set)


def matches_rotating(item: ItemRecord, criteria: RotatingCriteria) -> bool:
    if item.level not in criteria.level_range:
        return False

    if item.rarity == "unique":
        return False

    if item.type not in criteria.type_allow_list:
        return False

    if item.price_cp > criteria.price_ceiling_cp:
        return False

    if not _passes_taxonomy(item, criteria):
        return False

    if criteria.grade_filter_below_threshold and _is_low_grade_below_threshold(
        item, criteria.reference_level or 0
    ):
        return False

    return True


def _passes_taxonomy(item: ItemRecord, criteria: RotatingCriteria) -> bool:
    lower_name = item.name.lower()
    if any(marker in lower_name for marker in criteria.override_markers):
        return True

    if criteria.trait_exclude_all and item.traits & criteria.trait_exclude_all:
        return False

    in_category = bool(item.category and criteria.category_allow_list.get(item.category))

    if criteria.trait_require_any is not None:
        return bool(item.traits & criteria.trait_require_any) or in_category

    # Trait-exclusion mode: an uncategorised item passes.
    if item.category:
        return in_category
    return True


def _is_low_grade_below_threshold(item: ItemRecord, reference_level: int) -> bool:
    if item.level >= reference_level - 1:
        return False
    return item_grade(item.name) in _LOW_GRADES


def matches(item: ItemRecord, criteria: Criteria) -> bool:
    if isinstance(criteria, FixedInclusionCriteria):
        return matches_fixed(item, criteria)
    if isinstance(criteria, RotatingCriteria):
        return matches_rotating(item, criteria)
    raise CriteriaError(f"Unsupported criteria type: {type(criteria).__name__}")


def filter_catalog(catalog: Iterable[ItemRecord], criteria: Criteria) -> list[ItemRecord]:
    """Return the catalog items matching criteria, in catalog order."""
    _check_criteria(criteria)
    matched = [item for item in catalog if matches(item, criteria)]
    log.debug("Matched %d item(s) with %s", len(matched), type(criteria).__name__)
    return matched


def _check_criteria(criteria: Criteria) -> None:
    if not isinstance(criteria, FixedInclusionCriteria | RotatingCriteria):
        raise CriteriaError(f"Unsupported criteria type: {type(criteria).__name__}")
    if (
        isinstance(criteria, RotatingCriteria)
        and criteria.grade_filter_below_threshold
        and criteria.reference_level is None
    ):
        raise CriteriaError("gradeFilterBelowThreshold requires a referenceLevel")
