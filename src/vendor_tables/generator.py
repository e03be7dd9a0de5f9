"""
Vendor table generation: filter, deduplicate and build each partition of a profile.

The always-available partition is built unweighted so every staple is equally
likely. The rotating partition excludes anything already always available and
is weighted by rarity. A partition with no eligible items is reported in
``VendorTables.empty_partitions`` rather than aborting the other partition.
"""

import logging
from dataclasses import dataclass, field

from vendor_tables import builder
from vendor_tables.dedup import assert_disjoint, exclude_claimed
from vendor_tables.exceptions import EmptyTableError
from vendor_tables.filtering import filter_catalog
from vendor_tables.ids import IdSource, random_id
from vendor_tables.models import ItemRecord, RollTable, RotatingCriteria
from vendor_tables.profiles import VendorProfile
from vendor_tables.weights import WeightModel

log = logging.getLogger(__name__)

ALWAYS_AVAILABLE = "always-available"
ROTATING_STOCK = "rotating-stock"


@dataclass
class PartitionResult:
    key: str
    items: list[ItemRecord]
    table: RollTable | None = None


@dataclass
class VendorTables:
    profile: VendorProfile
    partitions: list[PartitionResult] = field(default_factory=list)
    empty_partitions: list[str] = field(default_factory=list)

    @property
    def tables(self) -> dict[str, RollTable]:
        return {p.key: p.table for p in self.partitions if p.table is not None}

    def output_filename(self, key: str) -> str:
        if self.profile.always_available is None:
            return f"{self.profile.slug}.json"
        return f"{self.profile.slug}-{key}.json"


def resolve_rotating_criteria(criteria: RotatingCriteria, player_level: int) -> RotatingCriteria:
    if criteria.grade_filter_below_threshold and criteria.reference_level is None:
        return criteria.model_copy(update={"reference_level": player_level})
    return criteria


def table_name(profile: VendorProfile, key: str, player_level: int) -> str:
    if profile.always_available is None:
        return f"{profile.name} (Level {player_level})"
    label = "Always Available" if key == ALWAYS_AVAILABLE else "Rotating Stock"
    return f"{profile.name} - {label} (Level {player_level})"


def generate_vendor_tables(
    catalog: list[ItemRecord],
    profile: VendorProfile,
    *,
    player_level: int,
    weights: WeightModel,
    id_source: IdSource = random_id,
    document_uuid_template: str = builder.DEFAULT_DOCUMENT_UUID_TEMPLATE,
    ownership_default: int = 0,
) -> VendorTables:
    result = VendorTables(profile=profile)
    rotating_criteria = resolve_rotating_criteria(profile.rotating_stock.criteria, player_level)

    always_items: list[ItemRecord] = []
    if profile.always_available is not None:
        always_items = filter_catalog(catalog, profile.always_available.criteria)
        log.info("%s: %d always-available item(s)", profile.name, len(always_items))

    rotating_matches = filter_catalog(catalog, rotating_criteria)
    rotating_items = exclude_claimed(always_items, rotating_matches)
    log.info(
        "%s: %d rotating item(s) (%d already always available)",
        profile.name,
        len(rotating_items),
        len(rotating_matches) - len(rotating_items),
    )
    assert_disjoint(always_items, rotating_items)

    def build(key: str, items: list[ItemRecord], description: str, img: str | None) -> None:
        partition = PartitionResult(key=key, items=items)
        try:
            partition.table = builder.build_table(
                items,
                name=table_name(profile, key, player_level),
                description=description,
                img=img,
                weights=weights,
                weighted=key == ROTATING_STOCK,
                id_source=id_source,
                document_uuid_template=document_uuid_template,
                ownership_default=ownership_default,
            )
        except EmptyTableError as e:
            log.warning("%s", e)
            result.empty_partitions.append(key)
        result.partitions.append(partition)

    if profile.always_available is not None:
        always = profile.always_available
        build(ALWAYS_AVAILABLE, always_items, always.description, always.img)

    rotating = profile.rotating_stock
    build(ROTATING_STOCK, rotating_items, rotating.description or profile.description, rotating.img)

    return result
