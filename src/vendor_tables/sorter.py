"""
Deterministic ordering of catalog items for roll table output.

Range assignment is position-dependent, so entries must be ordered the same way
every run regardless of the order items were loaded in. Items sort by level,
then by case-folded name, with the raw name and finally the item ID as
tie-breakers so the ordering is total.
"""

from collections.abc import Iterable
from typing import Protocol, TypeVar


class Sortable(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def level(self) -> int: ...


T = TypeVar("T", bound=Sortable)


def sort_items(items: Iterable[T]) -> list[T]:
    return sorted(items, key=_get_sort_key)


def _get_sort_key(item: Sortable) -> tuple[int, str, str, str]:
    return (item.level, item.name.casefold(), item.name, item.id)
