"""
Scroll and wand roll tables built from a spell catalog.

Produces an equiprobable table with one entry per spell of the requested rank,
optionally narrowed by tradition and rarity. Cantrips, focus spells and rituals
cannot be put on scrolls or wands and are always excluded.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from vendor_tables import builder
from vendor_tables.catalog import nested_value, tag_set
from vendor_tables.exceptions import CatalogError, CriteriaError, EmptyTableError
from vendor_tables.ids import IdSource, random_id
from vendor_tables.models import RollTable
from vendor_tables.weights import WeightModel

log = logging.getLogger(__name__)

MAX_SCROLL_RANK = 10
MAX_WAND_RANK = 9
DEFAULT_SPELL_UUID_TEMPLATE = "Compendium.pf2e.spells-srd.Item.{id}"

_EXCLUDED_SPELL_TRAITS = frozenset({"cantrip", "focus"})

Tradition = Literal["random", "arcane", "divine", "occult", "primal"]
RarityFilter = Literal["any", "common", "uncommon", "rare"]


class SpellRecord(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    img: str | None = None
    level: int = Field(ge=1)
    rarity: str = "common"
    traits: frozenset[str] = Field(default_factory=frozenset)
    traditions: frozenset[str] = Field(default_factory=frozenset)
    ritual: bool = False

    model_config = {"frozen": True}


class ScrollTableRequest(BaseModel):
    kind: Literal["scroll", "wand"] = "scroll"
    rank: int = Field(ge=1)
    tradition: Tradition = "random"
    rarity: RarityFilter = "any"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _validate_rank(self) -> ScrollTableRequest:
        if self.rank > MAX_SCROLL_RANK:
            raise ValueError(f"There are no spells above rank {MAX_SCROLL_RANK}")
        if self.kind == "wand" and self.rank > MAX_WAND_RANK:
            raise ValueError(f"There are no wands for spells above rank {MAX_WAND_RANK}")
        return self

    @property
    def title(self) -> str:
        return self.kind.capitalize()


def make_request(**fields: Any) -> ScrollTableRequest:
    try:
        return ScrollTableRequest(**fields)
    except PydanticValidationError as e:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        raise CriteriaError(messages) from e


def parse_spell(data: dict[str, Any]) -> SpellRecord:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a spell document object, got {type(data).__name__}")

    return SpellRecord(
        id=data.get("_id"),
        name=data.get("name"),
        img=data.get("img"),
        level=nested_value(data, "system", "level", "value"),
        rarity=nested_value(data, "system", "traits", "rarity") or "common",
        traits=tag_set(nested_value(data, "system", "traits", "value"), "traits.value"),
        traditions=tag_set(
            nested_value(data, "system", "traits", "traditions"), "traits.traditions"
        ),
        ritual=bool(nested_value(data, "system", "ritual")),
    )


def load_spells(directory: Path) -> list[SpellRecord]:
    if not directory.is_dir():
        raise CatalogError(f"Spell directory not found: {directory}")

    spells: list[SpellRecord] = []
    for path in sorted(directory.rglob("*.json")):
        try:
            with path.open(encoding="utf-8") as f:
                spells.append(parse_spell(json.load(f)))
        except (OSError, UnicodeDecodeError, ValueError, TypeError) as e:
            log.warning("Skipping %s: %s", path.name, str(e).splitlines()[0] if str(e) else e)

    log.info("Loaded %d spell(s) from %s", len(spells), directory)
    return spells


def matches_spell(spell: SpellRecord, request: ScrollTableRequest) -> bool:
    if spell.traits & _EXCLUDED_SPELL_TRAITS or spell.ritual:
        return False
    if spell.level != request.rank:
        return False
    if request.rarity != "any" and spell.rarity != request.rarity:
        return False
    if request.tradition != "random" and request.tradition not in spell.traditions:
        return False
    return True


def scroll_table_name(request: ScrollTableRequest) -> str:
    parts = [f"{request.title} Table - Rank {request.rank}"]
    if request.tradition != "random":
        parts.append(request.tradition)
    if request.rarity != "any":
        parts.append(request.rarity)
    return " ".join(parts)


def build_scroll_table(
    spells: Iterable[SpellRecord],
    request: ScrollTableRequest,
    *,
    id_source: IdSource = random_id,
    document_uuid_template: str = DEFAULT_SPELL_UUID_TEMPLATE,
    ownership_default: int = 0,
) -> RollTable:
    eligible = [spell for spell in spells if matches_spell(spell, request)]
    name = scroll_table_name(request)
    if not eligible:
        raise EmptyTableError(name)

    return builder.build_table(
        eligible,
        name=name,
        description=f"Generated {request.kind} table for rank {request.rank} spells",
        img=None,
        weights=WeightModel(),
        weighted=False,
        id_source=id_source,
        document_uuid_template=document_uuid_template,
        ownership_default=ownership_default,
        label=lambda spell: f"{request.title} of {spell.name} (Rank {request.rank})",
    )
