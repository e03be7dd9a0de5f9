"""Pydantic models for catalog items, filter criteria and roll table output."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

GRADE_SUFFIXES = {
    "(minor)": "lesser",
    "(lesser)": "lesser",
    "(moderate)": "moderate",
    "(greater)": "greater",
    "(major)": "major",
}

# --- Catalog ---


class ItemRecord(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    img: str | None = None
    level: int = 0
    rarity: str = "common"
    price_cp: int = Field(default=0, ge=0, alias="priceCp")
    type: str
    category: str | None = None
    traits: frozenset[str] = Field(default_factory=frozenset)

    model_config = {"populate_by_name": True, "frozen": True}


# --- Criteria ---


class LevelRange(BaseModel):
    min: int = 0
    max: int

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _validate_bounds(self) -> LevelRange:
        if self.min > self.max:
            raise ValueError(f"levelRange min ({self.min}) must be <= max ({self.max})")
        return self

    def __contains__(self, level: object) -> bool:
        return isinstance(level, int) and self.min <= level <= self.max


class FixedInclusionCriteria(BaseModel):
    """Criteria for partitions whose contents are named explicitly, e.g. always-available stock."""

    level_max: int = Field(alias="levelMax")
    rarity_required: bool = Field(default=False, alias="rarityRequired")
    name_exact_set: frozenset[str] = Field(default_factory=frozenset, alias="nameExactSet")
    name_pattern_set: tuple[str, ...] = Field(default=(), alias="namePatternSet")

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _validate_has_trigger(self) -> FixedInclusionCriteria:
        if not self.name_exact_set and not self.name_pattern_set:
            raise ValueError("nameExactSet or namePatternSet is required, nothing could match")
        if any(not pattern for pattern in self.name_pattern_set):
            raise ValueError("namePatternSet entries must be non-empty")
        return self


class RotatingCriteria(BaseModel):
    """Criteria for category-driven partitions, e.g. rotating vendor stock."""

    level_range: LevelRange = Field(alias="levelRange")
    type_allow_list: frozenset[str] = Field(alias="typeAllowList", min_length=1)
    category_allow_list: dict[str, bool] = Field(
        default_factory=dict, alias="categoryAllowList"
    )
    trait_require_any: frozenset[str] | None = Field(default=None, alias="traitRequireAny")
    trait_exclude_all: frozenset[str] | None = Field(default=None, alias="traitExcludeAll")
    price_ceiling: float = Field(alias="priceCeiling", ge=0)
    name_substring_override: tuple[str, ...] = Field(default=(), alias="nameSubstringOverride")
    grade_filter_below_threshold: bool = Field(default=False, alias="gradeFilterBelowThreshold")
    reference_level: int | None = Field(default=None, alias="referenceLevel")

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _validate_trait_sets(self) -> RotatingCriteria:
        if self.trait_require_any is not None and not self.trait_require_any:
            raise ValueError("traitRequireAny must not be empty when present")
        if self.trait_require_any and self.trait_exclude_all:
            conflicting = sorted(self.trait_require_any & self.trait_exclude_all)
            if conflicting:
                raise ValueError(
                    f"traits {conflicting} are both required (traitRequireAny) "
                    "and excluded (traitExcludeAll)"
                )
        return self

    @model_validator(mode="after")
    def _validate_override_markers(self) -> RotatingCriteria:
        if any(not marker.strip() for marker in self.name_substring_override):
            raise ValueError("nameSubstringOverride markers must be non-empty")
        return self

    @property
    def price_ceiling_cp(self) -> int:
        return round(self.price_ceiling * 100)

    @property
    def override_markers(self) -> tuple[str, ...]:
        return tuple(marker.lower() for marker in self.name_substring_override)


Criteria = FixedInclusionCriteria | RotatingCriteria


# --- Roll Table ---


class TableResult(BaseModel):
    id: str = Field(alias="_id")
    description: str = ""
    document_uuid: str = Field(alias="documentUuid")
    drawn: bool = False
    img: str | None = None
    name: str
    range: tuple[int, int]
    type: Literal["document"] = "document"
    weight: int = Field(ge=1)

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _validate_range_width(self) -> TableResult:
        low, high = self.range
        if high - low + 1 != self.weight:
            raise ValueError(
                f"range {list(self.range)} of '{self.name}' does not span weight {self.weight}"
            )
        return self


class RollTable(BaseModel):
    id: str = Field(alias="_id")
    description: str
    display_roll: bool = Field(default=True, alias="displayRoll")
    formula: str
    img: str | None = None
    name: str
    ownership: dict[str, int] = Field(default_factory=lambda: {"default": 0})
    replacement: bool = True
    results: list[TableResult] = Field(min_length=1)

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _validate_contiguous_ranges(self) -> RollTable:
        expected_low = 1
        for result in self.results:
            low, high = result.range
            if low != expected_low:
                raise ValueError(
                    f"result '{result.name}' starts at {low}, expected {expected_low}"
                )
            expected_low = high + 1
        if self.formula != f"1d{self.total_weight}":
            raise ValueError(
                f"formula '{self.formula}' does not match total weight {self.total_weight}"
            )
        return self

    @property
    def total_weight(self) -> int:
        return sum(result.weight for result in self.results)

    def to_foundry(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
