"""
Tests for catalog filtering in both matching modes.

Fixed-inclusion mode only admits items named by the inclusion lists, within the
level bound. Rotating mode applies level, rarity, type and price gates, then the
name override, trait exclusion, trait/category acceptance and the grade filter.
"""

import pytest
from pydantic import ValidationError

from vendor_tables import filtering
from vendor_tables.exceptions import CriteriaError
from vendor_tables.models import FixedInclusionCriteria, ItemRecord, LevelRange, RotatingCriteria


def make_item(name: str = "Longsword", **overrides) -> ItemRecord:
    fields = {
        "id": name.lower().replace(" ", "-"),
        "name": name,
        "type": "weapon",
        "level": 1,
        "rarity": "common",
        "price_cp": 100,
        "category": "martial",
        "traits": frozenset(),
    }
    fields.update(overrides)
    return ItemRecord(**fields)


ALWAYS = FixedInclusionCriteria(
    level_max=2,
    rarity_required=True,
    name_exact_set={"Dagger", "Longsword", "Rope"},
)

ARMORY = RotatingCriteria(
    level_range=LevelRange(min=1, max=9),
    type_allow_list={"weapon", "armor", "shield", "equipment"},
    category_allow_list={"simple": True, "martial": True, "light": True, "general": True},
    trait_exclude_all={"consumable", "magical"},
    price_ceiling=1000,
)

ARCANE = RotatingCriteria(
    level_range=LevelRange(min=1, max=9),
    type_allow_list={"consumable", "equipment"},
    trait_require_any={"consumable", "magical", "alchemical"},
    category_allow_list={"potion": True, "scroll": True, "poison": False},
    name_substring_override=("wand", "staff", "rod", "scroll"),
    price_ceiling=2000,
)


class TestFixedInclusion:
    def test_exact_name_matches(self):
        assert filtering.matches_fixed(make_item("Dagger", level=0), ALWAYS)

    def test_unlisted_name_does_not_match(self):
        assert not filtering.matches_fixed(make_item("Greatsword", level=0), ALWAYS)

    def test_level_bound_dominates_exact_name(self):
        assert not filtering.matches_fixed(make_item("Longsword", level=3), ALWAYS)

    def test_level_at_bound_matches(self):
        assert filtering.matches_fixed(make_item("Longsword", level=2), ALWAYS)

    def test_common_only_rejects_uncommon(self):
        assert not filtering.matches_fixed(make_item("Rope", rarity="uncommon"), ALWAYS)

    def test_rarity_not_restricted_when_not_required(self):
        criteria = FixedInclusionCriteria(level_max=2, name_exact_set={"Rope"})

        assert filtering.matches_fixed(make_item("Rope", rarity="rare"), criteria)

    def test_name_pattern_substring_matches(self):
        criteria = FixedInclusionCriteria(
            level_max=6, name_pattern_set=("Elixir of Life", "Antidote")
        )

        assert filtering.matches_fixed(make_item("Elixir of Life (Greater)", level=6), criteria)
        assert filtering.matches_fixed(make_item("Antidote (Moderate)", level=6), criteria)

    def test_name_pattern_is_case_sensitive(self):
        criteria = FixedInclusionCriteria(level_max=6, name_pattern_set=("Antidote",))

        assert not filtering.matches_fixed(make_item("antidote (lesser)"), criteria)

    def test_criteria_without_inclusion_lists_rejected(self):
        with pytest.raises(ValidationError, match="nothing could match"):
            FixedInclusionCriteria(level_max=2)


class TestRotatingGates:
    def test_matching_item(self):
        assert filtering.matches_rotating(make_item(), ARMORY)

    @pytest.mark.parametrize("level", [0, 10])
    def test_level_outside_range_rejected(self, level):
        assert not filtering.matches_rotating(make_item(level=level), ARMORY)

    @pytest.mark.parametrize("level", [1, 9])
    def test_level_range_inclusive(self, level):
        assert filtering.matches_rotating(make_item(level=level), ARMORY)

    def test_unique_always_rejected(self):
        item = make_item("Wand of Wonder", type="equipment", rarity="unique", traits={"magical"})

        assert not filtering.matches_rotating(item, ARCANE)
        assert not filtering.matches_rotating(make_item(rarity="unique"), ARMORY)

    def test_type_not_allowed_rejected(self):
        assert not filtering.matches_rotating(make_item(type="treasure"), ARMORY)

    def test_price_at_ceiling_included(self):
        assert filtering.matches_rotating(make_item(price_cp=100_000), ARMORY)

    def test_price_one_unit_above_ceiling_rejected(self):
        assert not filtering.matches_rotating(make_item(price_cp=100_001), ARMORY)

    def test_fractional_price_ceiling(self):
        criteria = ARMORY.model_copy(update={"price_ceiling": 2.5})

        assert filtering.matches_rotating(make_item(price_cp=250), criteria)
        assert not filtering.matches_rotating(make_item(price_cp=251), criteria)


class TestRotatingTaxonomy:
    def test_excluded_trait_rejected(self):
        item = make_item("Flaming Longsword", traits={"magical", "fire"})

        assert not filtering.matches_rotating(item, ARMORY)

    def test_disabled_category_rejected_in_exclusion_mode(self):
        assert not filtering.matches_rotating(make_item(category="advanced"), ARMORY)

    def test_uncategorised_item_passes_in_exclusion_mode(self):
        assert filtering.matches_rotating(make_item("Lantern", category=None), ARMORY)

    def test_required_trait_accepts(self):
        item = make_item(
            "Healing Potion", type="consumable", category=None, traits={"consumable", "healing"}
        )

        assert filtering.matches_rotating(item, ARCANE)

    def test_enabled_category_accepts_without_trait(self):
        item = make_item("Mystery Draught", type="consumable", category="potion")

        assert filtering.matches_rotating(item, ARCANE)

    def test_neither_trait_nor_category_rejected(self):
        item = make_item("Bag of Holding", type="equipment", category="poison")

        assert not filtering.matches_rotating(item, ARCANE)

    def test_substring_override_bypasses_trait_and_category(self):
        item = make_item(
            "Wand of Magic Missile", type="equipment", category="unlisted", traits=frozenset()
        )

        assert filtering.matches_rotating(item, ARCANE)

    def test_substring_override_is_case_insensitive(self):
        criteria = ARCANE.model_copy(update={"name_substring_override": ("WAND",)})
        item = make_item("Wand of Slaying", type="equipment", category=None)

        assert filtering.matches_rotating(item, criteria)

    def test_override_takes_precedence_over_exclusion(self):
        criteria = ARMORY.model_copy(update={"name_substring_override": ("staff",)})
        item = make_item("Staff of Fire", type="weapon", category="simple", traits={"magical"})

        assert filtering.matches_rotating(item, criteria)

    def test_override_does_not_bypass_hard_gates(self):
        item = make_item("Wand of Manifold Missiles", type="equipment", price_cp=300_000)

        assert not filtering.matches_rotating(item, ARCANE)

    def test_conflicting_trait_sets_rejected(self):
        with pytest.raises(ValidationError, match="both required"):
            RotatingCriteria(
                level_range={"min": 1, "max": 9},
                type_allow_list={"consumable"},
                trait_require_any={"magical"},
                trait_exclude_all={"magical", "cursed"},
                price_ceiling=10,
            )

    def test_inverted_level_range_rejected(self):
        with pytest.raises(ValidationError, match="must be <="):
            LevelRange(min=9, max=1)


class TestGradeFilter:
    CRITERIA = ARCANE.model_copy(
        update={"grade_filter_below_threshold": True, "reference_level": 7}
    )

    def test_lesser_grade_well_below_level_rejected(self):
        item = make_item("Antidote (Lesser)", type="consumable", level=3, traits={"consumable"})

        assert not filtering.matches_rotating(item, self.CRITERIA)

    def test_minor_grade_well_below_level_rejected(self):
        item = make_item("Elixir of Life (Minor)", type="consumable", level=1, category="elixir")
        criteria = self.CRITERIA.model_copy(
            update={"category_allow_list": {"elixir": True}}
        )

        assert not filtering.matches_rotating(item, criteria)

    def test_lesser_grade_near_level_kept(self):
        item = make_item("Antidote (Lesser)", type="consumable", level=6, traits={"consumable"})

        assert filtering.matches_rotating(item, self.CRITERIA)

    def test_higher_grade_below_level_kept(self):
        item = make_item("Antidote (Moderate)", type="consumable", level=3, traits={"consumable"})

        assert filtering.matches_rotating(item, self.CRITERIA)

    def test_grade_filter_applies_to_override_matches(self):
        item = make_item("Scroll Case (Lesser)", type="equipment", level=2, category=None)

        assert filtering.matches_rotating(item, ARCANE)
        assert not filtering.matches_rotating(item, self.CRITERIA)

    def test_grade_filter_without_reference_level_is_configuration_error(self):
        criteria = ARCANE.model_copy(update={"grade_filter_below_threshold": True})

        with pytest.raises(CriteriaError, match="referenceLevel"):
            filtering.filter_catalog([make_item()], criteria)


@pytest.mark.parametrize(
    ("name", "grade"),
    [
        ("Antidote (Lesser)", "lesser"),
        ("Elixir of Life (Minor)", "lesser"),
        ("Acid Flask (Moderate)", "moderate"),
        ("Healing Potion (Greater)", "greater"),
        ("Bomber's Eye Elixir (Major)", "major"),
        ("Holy Water", "base"),
    ],
)
def test_item_grade(name, grade):
    assert filtering.item_grade(name) == grade


def test_filter_catalog_dispatches_and_keeps_order():
    catalog = [
        make_item("Rope", level=0, type="equipment", category=None),
        make_item("Greatsword", level=1),
        make_item("Dagger", level=0, category="simple"),
    ]

    always = filtering.filter_catalog(catalog, ALWAYS)
    rotating = filtering.filter_catalog(catalog, ARMORY)

    assert [item.name for item in always] == ["Rope", "Dagger"]
    assert [item.name for item in rotating] == ["Greatsword"]


def test_matches_rejects_unsupported_criteria():
    with pytest.raises(CriteriaError, match="Unsupported criteria type"):
        filtering.matches(make_item(), {"levelMax": 2})
