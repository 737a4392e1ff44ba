"""Unit tests for the checklist generator.

Tests derived quantities, rating tiers, roof-type structure items and the
fixed category order of the generated checklist.
"""

from __future__ import annotations

import pytest

from app.handlers.checklist import (
    ac_breaker_rating_a,
    adjusted_inverter_power_kw,
    generate_checklist_items,
    string_configuration,
    structure_items,
    surge_protector_rating_ka,
    total_panel_power_kw,
)
from app.models.checklist import ChecklistCategory
from app.models.project import RoofType


def titles(items):
    return [item.title for item in items]


def by_category(items, category):
    return [item for item in items if item.category == category]


class TestStringConfiguration:
    """Test the 2x2 / 3x3 split."""

    @pytest.mark.parametrize("panel_count", [1, 2, 6, 8])
    def test_up_to_eight_panels_use_two_strings(self, panel_count):
        config = string_configuration(panel_count)

        assert config.number_of_strings == 2
        assert config.label == "2x2"

    @pytest.mark.parametrize("panel_count", [9, 12, 100, 200])
    def test_more_than_eight_panels_use_three_strings(self, panel_count):
        config = string_configuration(panel_count)

        assert config.number_of_strings == 3
        assert config.label == "3x3"

    def test_panels_per_string_rounds_up(self):
        assert string_configuration(7).panels_per_string == 4
        assert string_configuration(10).panels_per_string == 4
        assert string_configuration(9).panels_per_string == 3


class TestDerivedQuantities:
    """Test power and rating helpers."""

    def test_total_panel_power_assumes_550w_panels(self):
        assert total_panel_power_kw(6) == pytest.approx(3.3)
        assert total_panel_power_kw(20) == pytest.approx(11.0)

    def test_inverter_power_floor(self):
        assert adjusted_inverter_power_kw(1.5) == 3.0
        assert adjusted_inverter_power_kw(3.0) == 3.0
        assert adjusted_inverter_power_kw(4.2) == 4.2

    @pytest.mark.parametrize(
        "power_kw, expected",
        [(3.0, 32), (5.0, 32), (5.01, 40), (8.0, 40), (8.01, 50), (100.0, 50)],
    )
    def test_breaker_tiers_use_strict_upper_bounds(self, power_kw, expected):
        assert ac_breaker_rating_a(power_kw) == expected

    @pytest.mark.parametrize(
        "power_kw, expected",
        [(3.0, 20), (5.0, 20), (5.01, 40), (15.0, 40), (15.01, 60)],
    )
    def test_surge_protector_tiers(self, power_kw, expected):
        assert surge_protector_rating_ka(power_kw) == expected


class TestGenerateChecklistItems:
    """Test the full checklist."""

    def test_is_deterministic(self):
        first = generate_checklist_items(14, 7.5, RoofType.FIBER_CEMENT)
        second = generate_checklist_items(14, 7.5, RoofType.FIBER_CEMENT)

        assert [i.model_dump() for i in first] == [i.model_dump() for i in second]

    def test_category_order(self):
        items = generate_checklist_items(6, 3.3, RoofType.CERAMIC)
        categories = [item.category for item in items]

        assert categories[0] == ChecklistCategory.SAFETY
        assert categories[1:7] == [ChecklistCategory.ELECTRICAL_MATERIALS] * 6
        assert set(categories[7:]) == {ChecklistCategory.STRUCTURE}

    def test_power_below_floor_matches_floor(self):
        low = generate_checklist_items(6, 1.5, RoofType.CERAMIC)
        floor = generate_checklist_items(6, 3.0, RoofType.CERAMIC)

        assert [i.model_dump() for i in low] == [i.model_dump() for i in floor]
        assert "6 mm² AC cable (18 m)" in titles(low)

    def test_scenario_small_ceramic_roof(self):
        """6 panels, 3.3 kW, ceramic roof."""
        items = generate_checklist_items(6, 3.3, RoofType.CERAMIC)
        item_titles = titles(items)

        assert len(items) == 11
        assert "6 mm² DC solar cable (27 m)" in item_titles
        assert "MC4 connectors (3 pairs)" in item_titles
        assert "DC string box 2x1" in item_titles
        assert "6 mm² AC cable (19 m)" in item_titles
        assert "AC breaker 32A" in item_titles
        assert "Ceramic tile roof hooks (8 pcs)" in item_titles
        assert "Anodized aluminium rails (14 m)" in item_titles
        assert "Module clamps (12 pcs)" in item_titles
        assert "Ceramic roof fixation kit (8 kits)" in item_titles

        dc_cable = items[1]
        assert dc_cable.description.startswith("14 m red + 14 m black")
        assert "2x2 configuration" in dc_cable.description

        surge = items[6]
        assert "20kA" in surge.description
        assert "3.3kW" in surge.description

    def test_scenario_ground_mount(self):
        """12 panels, 6 kW, ground mount."""
        items = generate_checklist_items(12, 6.0, RoofType.GROUND_MOUNT)
        item_titles = titles(items)

        assert len(items) == 11
        assert "AC breaker 40A" in item_titles
        assert "MC4 connectors (4 pairs)" in item_titles
        assert "DC string box 3x1" in item_titles
        assert "Fixed ground-mount structure (2 kits)" in item_titles
        assert "Concrete foundations (6 pcs)" in item_titles
        assert "Anchoring kit (6 kits)" in item_titles
        assert "Ground-mount grounding mesh" in item_titles

        mesh = items[-1]
        assert "6 interconnected" in mesh.description

    def test_scenario_metal_roof(self):
        """20 panels, 11 kW, metal roof."""
        items = generate_checklist_items(20, 11.0, RoofType.METAL)
        item_titles = titles(items)

        assert "AC breaker 50A" in item_titles
        assert "40kA" in items[6].description
        assert "Trapezoidal sheet clamps (17 pcs)" in item_titles
        assert "Anodized aluminium rails (45 m)" in item_titles
        assert "Self-tapping screws (48 pcs)" in item_titles

    def test_grounding_item_quantities(self):
        safety = generate_checklist_items(12, 6.0, RoofType.METAL)[0]

        assert safety.category == ChecklistCategory.SAFETY
        assert "(2 pcs)" in safety.description
        assert "(24 m)" in safety.description

    def test_string_fuse_rating(self):
        string_box = generate_checklist_items(6, 3.3, RoofType.CERAMIC)[3]

        assert "18A fuses" in string_box.description

    def test_roof_type_accepts_plain_strings(self):
        as_enum = generate_checklist_items(10, 5.0, RoofType.METAL)
        as_str = generate_checklist_items(10, 5.0, "metal")

        assert [i.model_dump() for i in as_enum] == [i.model_dump() for i in as_str]

    def test_unknown_roof_type_keeps_safety_and_electrical_items(self):
        items = generate_checklist_items(6, 3.3, "thatch")

        assert len(items) == 7
        assert by_category(items, ChecklistCategory.STRUCTURE) == []


class TestStructureItems:
    """Test the per-roof-type structure calculators."""

    @pytest.mark.parametrize(
        "roof_type, expected_count",
        [
            (RoofType.CERAMIC, 4),
            (RoofType.METAL, 4),
            (RoofType.FIBER_CEMENT, 5),
            (RoofType.GROUND_MOUNT, 4),
        ],
    )
    def test_item_count_per_roof_type(self, roof_type, expected_count):
        items = structure_items(roof_type, 14, 3)

        assert len(items) == expected_count
        assert all(item.category == ChecklistCategory.STRUCTURE for item in items)

    def test_unknown_roof_type_returns_empty_list(self):
        assert structure_items("thatch", 10, 3) == []

    def test_fiber_cement_reinforcement(self):
        """14 panels -> 17 fixation points -> 6 reinforcement profiles."""
        items = structure_items(RoofType.FIBER_CEMENT, 14, 3)

        assert items[0].title == "Fiber-cement roof hooks (17 pcs)"
        assert items[-1].title == "Structural reinforcement"
        assert items[-1].description.startswith("6 galvanized steel")

    def test_ceramic_clamp_split(self):
        clamps = structure_items(RoofType.CERAMIC, 10, 3)[2]

        assert clamps.title == "Module clamps (20 pcs)"
        assert clamps.description.startswith("2 end clamps + 18 mid clamps")

    def test_ground_mount_kits_round_up(self):
        items = structure_items(RoofType.GROUND_MOUNT, 7, 2)

        assert items[0].title == "Fixed ground-mount structure (2 kits)"
        assert items[1].title == "Concrete foundations (4 pcs)"

    def test_number_of_strings_is_required(self):
        with pytest.raises(TypeError):
            structure_items(RoofType.CERAMIC, 6)

    def test_structure_uses_generator_string_count(self):
        """9 panels split into 3 strings: 3 panels per row, 7 m of rail each."""
        items = generate_checklist_items(9, 5.0, RoofType.CERAMIC)

        assert "Anodized aluminium rails (21 m)" in titles(items)
        assert structure_items(RoofType.CERAMIC, 9, 3) == items[7:]
