"""
Weighted roll table construction.

Items are ordered deterministically, then each receives the next contiguous run
of roll values, as wide as its weight. The table formula is ``1d<N>`` where N is
the total weight, so every value in 1..N selects exactly one entry.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from vendor_tables import sorter
from vendor_tables.exceptions import EmptyTableError
from vendor_tables.ids import IdSource, random_id
from vendor_tables.models import RollTable, TableResult
from vendor_tables.weights import WeightModel

log = logging.getLogger(__name__)

DEFAULT_DOCUMENT_UUID_TEMPLATE = "Compendium.pf2e.equipment-srd.Item.{id}"


class Rollable(sorter.Sortable, Protocol):
    @property
    def rarity(self) -> str: ...

    @property
    def img(self) -> str | None: ...


def build_table(
    items: Iterable[Rollable],
    *,
    name: str,
    description: str,
    img: str | None,
    weights: WeightModel,
    weighted: bool = True,
    id_source: IdSource = random_id,
    document_uuid_template: str = DEFAULT_DOCUMENT_UUID_TEMPLATE,
    ownership_default: int = 0,
    label: Callable[[Rollable], str] | None = None,
) -> RollTable:
    """
    Build a roll table from already-filtered items.

    When ``weighted`` is False every entry has weight 1 (equiprobable). Items
    whose rarity weight is 0 are dropped entirely. Raises EmptyTableError when
    nothing survives, instead of producing an unrollable ``1d0`` table.
    """
    results: list[TableResult] = []
    cursor = 1
    dropped = 0

    for item in sorter.sort_items(items):
        weight = weights.weight_for(item.rarity) if weighted else 1
        if weight == 0:
            dropped += 1
            continue

        results.append(
            TableResult(
                id=id_source(),
                document_uuid=document_uuid_template.format(id=item.id),
                img=item.img,
                name=label(item) if label else item.name,
                range=(cursor, cursor + weight - 1),
                weight=weight,
            )
        )
        cursor += weight

    total_weight = cursor - 1
    if dropped:
        log.info("%s: dropped %d zero-weight item(s)", name, dropped)
    if total_weight == 0:
        raise EmptyTableError(name)

    return RollTable(
        id=id_source(),
        description=description,
        formula=f"1d{total_weight}",
        img=img,
        name=name,
        ownership={"default": ownership_default},
        results=results,
    )
