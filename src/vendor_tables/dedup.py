"""
Disjointness between partitions drawn from the same catalog.

An item claimed by a lower-numbered or always-available partition must not also
appear in a later partition, e.g. a Longsword that is always in stock is not
also rolled as rotating stock.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from vendor_tables.exceptions import PartitionOverlapError
from vendor_tables.models import ItemRecord

log = logging.getLogger(__name__)


def exclude_claimed(
    claimed: Iterable[ItemRecord], candidates: Iterable[ItemRecord]
) -> list[ItemRecord]:
    """Return candidates whose ID is not in claimed, preserving candidate order."""
    claimed_ids = {item.id for item in claimed}
    remaining = []
    for item in candidates:
        if item.id in claimed_ids:
            log.debug("Dropping '%s' (%s): already claimed", item.name, item.id)
            continue
        remaining.append(item)
    return remaining


def assert_disjoint(*partitions: Sequence[ItemRecord]) -> None:
    id_counts: Counter[str] = Counter()
    for partition in partitions:
        id_counts.update({item.id for item in partition})
    shared = sorted(item_id for item_id, count in id_counts.items() if count > 1)
    if shared:
        raise PartitionOverlapError(shared)
