"""
Checklist generation handler.

Turns the three sizing inputs of a project (panel count, inverter power,
roof type) into the ordered materials and safety checklist. Everything here
is a pure function of its arguments: no I/O, no session, no randomness.
"""

import math
from typing import Callable, Dict, List, NamedTuple, Union

from app.models.checklist import ChecklistCategory, ChecklistItemCreate
from app.models.project import RoofType
from app.core.constants import (
    PANEL_POWER_W,
    PANEL_OPEN_CIRCUIT_VOLTAGE_V,
    MIN_INVERTER_POWER_KW,
    STRING_SPLIT_THRESHOLD,
    DC_CABLE_M_PER_PANEL,
    AC_CABLE_M_PER_KW,
    AC_CABLE_RESERVE_M,
    MIN_MC4_PAIRS,
    STRING_FUSE_FACTOR,
    BREAKER_TIERS_A,
    SURGE_PROTECTOR_TIERS_KA,
    GROUND_RODS_PER_STRING,
    GROUND_CABLE_M_PER_PANEL,
    RAIL_M_PER_PANEL,
    FIXATION_POINTS_PER_PANEL,
    TRAPEZOIDAL_CLAMP_FACTOR,
    REINFORCEMENT_FACTOR,
    PANELS_PER_GROUND_KIT,
    GROUND_MOUNT_TILT_DEG,
    FOUNDATIONS_PER_STRING,
)


class StringConfiguration(NamedTuple):
    """How the panels are split into strings."""
    label: str
    number_of_strings: int
    panels_per_string: int


def string_configuration(panel_count: int) -> StringConfiguration:
    """
    Derive the string layout from the panel count.

    More than 8 panels are wired as "3x3" (3 strings), anything else as
    "2x2" (2 strings). This is the only place the layout is decided; the
    project detail view and the AI prompt both call it.
    """
    number_of_strings = 3 if panel_count > STRING_SPLIT_THRESHOLD else 2
    label = f"{number_of_strings}x{number_of_strings}"
    return StringConfiguration(
        label=label,
        number_of_strings=number_of_strings,
        panels_per_string=math.ceil(panel_count / number_of_strings),
    )


def total_panel_power_kw(panel_count: int) -> float:
    """Installed DC power of the array in kW."""
    return panel_count * PANEL_POWER_W / 1000.0


def adjusted_inverter_power_kw(inverter_power_kw: float) -> float:
    """Inverter power with the 3 kW floor re-applied."""
    return max(inverter_power_kw, MIN_INVERTER_POWER_KW)


def _tier(power_kw: float, tiers) -> int:
    """Pick the rating of the first tier whose upper bound is >= power."""
    for upper_bound, rating in tiers:
        if upper_bound is None or power_kw <= upper_bound:
            return rating
    raise ValueError("rating tiers must end with an unbounded tier")


def ac_breaker_rating_a(power_kw: float) -> int:
    """32A up to 5 kW, 40A up to 8 kW, 50A above."""
    return _tier(power_kw, BREAKER_TIERS_A)


def surge_protector_rating_ka(power_kw: float) -> int:
    """20kA up to 5 kW, 40kA up to 15 kW, 60kA above."""
    return _tier(power_kw, SURGE_PROTECTOR_TIERS_KA)


def _kw(value: float) -> str:
    return f"{value:g}"


def _safety_items(panel_count: int, strings: StringConfiguration) -> List[ChecklistItemCreate]:
    ground_rods = math.ceil(strings.number_of_strings * GROUND_RODS_PER_STRING)
    ground_cable_m = math.ceil(panel_count * GROUND_CABLE_M_PER_PANEL)
    return [
        ChecklistItemCreate(
            title="Equipotential grounding system",
            description=(
                f"Copper-clad ground rods 2.4 m ({ground_rods} pcs), "
                f"bare copper cable 16 mm² ({ground_cable_m} m), grounding connectors"
            ),
            category=ChecklistCategory.SAFETY,
        ),
    ]


def _electrical_items(
    panel_count: int,
    power_kw: float,
    strings: StringConfiguration,
) -> List[ChecklistItemCreate]:
    dc_cable_m = math.ceil(panel_count * DC_CABLE_M_PER_PANEL)
    dc_half_m = math.ceil(dc_cable_m / 2)
    ac_cable_m = math.ceil(power_kw * AC_CABLE_M_PER_KW + AC_CABLE_RESERVE_M)
    mc4_pairs = max(MIN_MC4_PAIRS, strings.number_of_strings + 1)
    string_current_a = PANEL_POWER_W / PANEL_OPEN_CIRCUIT_VOLTAGE_V
    fuse_a = math.ceil(string_current_a * STRING_FUSE_FACTOR)
    breaker_a = ac_breaker_rating_a(power_kw)
    surge_ka = surge_protector_rating_ka(power_kw)
    category = ChecklistCategory.ELECTRICAL_MATERIALS

    return [
        ChecklistItemCreate(
            title=f"6 mm² DC solar cable ({dc_cable_m} m)",
            description=(
                f"{dc_half_m} m red + {dc_half_m} m black, double-insulated 6 mm² "
                f"solar cable for {strings.label} configuration"
            ),
            category=category,
        ),
        ChecklistItemCreate(
            title=f"MC4 connectors ({mc4_pairs} pairs)",
            description=(
                "Genuine MC4 connectors: 1 pair on the roof (string interconnection) "
                "+ 2 pairs at the inverter (DC input)"
            ),
            category=category,
        ),
        ChecklistItemCreate(
            title=f"DC string box {strings.number_of_strings}x1",
            description=(
                f"DC protection box for {strings.label} configuration, "
                f"{fuse_a}A fuses, type II DC surge protector"
            ),
            category=category,
        ),
        ChecklistItemCreate(
            title=f"6 mm² AC cable ({ac_cable_m} m)",
            description=(
                f"Multicore 6 mm² cable for {_kw(power_kw)}kW (3kW minimum), "
                "0.6/1kV insulation, inverter to AC panel"
            ),
            category=category,
        ),
        ChecklistItemCreate(
            title=f"AC breaker {breaker_a}A",
            description=(
                f"Three-pole {breaker_a}A breaker, curve C, 6kA, "
                "protecting the AC circuit"
            ),
            category=category,
        ),
        ChecklistItemCreate(
            title="AC surge protector class II",
            description=(
                f"AC surge protection device, {surge_ka}kA, "
                f"rated for {_kw(power_kw)}kW"
            ),
            category=category,
        ),
    ]


# Structure calculators, one per roof type

def _rails(number_of_strings: int, panel_count: int, detail: str) -> ChecklistItemCreate:
    panels_per_row = math.ceil(panel_count / number_of_strings)
    total_rail_m = math.ceil(panels_per_row * RAIL_M_PER_PANEL) * number_of_strings
    return ChecklistItemCreate(
        title=f"Anodized aluminium rails ({total_rail_m} m)",
        description=detail.format(
            strings=number_of_strings,
            panels_per_row=panels_per_row,
        ),
        category=ChecklistCategory.STRUCTURE,
    )


def _fixation_points(panel_count: int) -> int:
    return math.ceil(panel_count * FIXATION_POINTS_PER_PANEL)


def _ceramic_items(panel_count: int, number_of_strings: int) -> List[ChecklistItemCreate]:
    fixation_points = _fixation_points(panel_count)
    return [
        ChecklistItemCreate(
            title=f"Ceramic tile roof hooks ({fixation_points} pcs)",
            description=(
                "Adjustable 316 stainless steel hooks for ceramic tiles, double EPDM "
                f"seal, supporting {number_of_strings} rows"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        _rails(
            number_of_strings,
            panel_count,
            "40x40 mm rails for {strings} strings of {panels_per_row} panels, "
            "including splices, end caps and adjusters",
        ),
        ChecklistItemCreate(
            title=f"Module clamps ({panel_count * 2} pcs)",
            description=(
                f"{math.ceil(panel_count * 0.2)} end clamps + "
                f"{math.ceil(panel_count * 1.8)} mid clamps, anodized aluminium"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        ChecklistItemCreate(
            title=f"Ceramic roof fixation kit ({fixation_points} kits)",
            description="M8x80 screws, S8 anchors, washers and EPDM seals for ceramic roof structure",
            category=ChecklistCategory.STRUCTURE,
        ),
    ]


def _metal_items(panel_count: int, number_of_strings: int) -> List[ChecklistItemCreate]:
    fixation_points = _fixation_points(panel_count)
    return [
        ChecklistItemCreate(
            title=f"Trapezoidal sheet clamps ({math.ceil(fixation_points * TRAPEZOIDAL_CLAMP_FACTOR)} pcs)",
            description=(
                "Clamps for trapezoidal/standing-seam sheet, suitable for "
                f"{number_of_strings} rows, double EPDM seal"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        _rails(
            number_of_strings,
            panel_count,
            "40x40 mm rail system for metal roof structure, {strings} strings, "
            "with connectors and end caps",
        ),
        ChecklistItemCreate(
            title=f"Module clamps ({panel_count * 2} pcs)",
            description=(
                f"End and mid clamps fixing {panel_count} panels "
                f"in {number_of_strings} strings"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        ChecklistItemCreate(
            title=f"Self-tapping screws ({fixation_points * 2} pcs)",
            description="12x80 mm screws with EPDM seal, drill points rated for metal profiles",
            category=ChecklistCategory.STRUCTURE,
        ),
    ]


def _fiber_cement_items(panel_count: int, number_of_strings: int) -> List[ChecklistItemCreate]:
    fixation_points = _fixation_points(panel_count)
    return [
        ChecklistItemCreate(
            title=f"Fiber-cement roof hooks ({fixation_points} pcs)",
            description=(
                "Galvanized steel hooks for fiber-cement sheets, reinforced EPDM seal, "
                f"for {number_of_strings} rows"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        _rails(
            number_of_strings,
            panel_count,
            "Reinforced 40x40 mm rail system for fiber-cement, {strings} strings "
            "of {panels_per_row} panels, with special connectors",
        ),
        ChecklistItemCreate(
            title=f"Module clamps ({panel_count * 2} pcs)",
            description="Anodized aluminium end and mid clamps rated for wind load on fiber-cement",
            category=ChecklistCategory.STRUCTURE,
        ),
        ChecklistItemCreate(
            title=f"Fiber-cement fixation kit ({fixation_points} kits)",
            description=(
                "12x100 mm self-tapping screws, special anchors, metal washers and "
                "double EPDM seals for fiber-cement sheets"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        ChecklistItemCreate(
            title="Structural reinforcement",
            description=(
                f"{math.ceil(fixation_points * REINFORCEMENT_FACTOR)} galvanized steel "
                "internal reinforcement profiles to spread loads on fiber-cement sheets"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
    ]


def _ground_mount_items(panel_count: int, number_of_strings: int) -> List[ChecklistItemCreate]:
    kits = math.ceil(panel_count / PANELS_PER_GROUND_KIT)
    foundations = number_of_strings * FOUNDATIONS_PER_STRING
    return [
        ChecklistItemCreate(
            title=f"Fixed ground-mount structure ({kits} kits)",
            description=(
                f"Fixed ground structure, {PANELS_PER_GROUND_KIT} panels per kit, "
                f"{GROUND_MOUNT_TILT_DEG}° tilt, for {number_of_strings} strings"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        ChecklistItemCreate(
            title=f"Concrete foundations ({foundations} pcs)",
            description=(
                "40x40x60 cm foundation blocks or continuous-flight auger piles, "
                f"sized for {panel_count} panels"
            ),
            category=ChecklistCategory.STRUCTURE,
        ),
        ChecklistItemCreate(
            title=f"Anchoring kit ({foundations} kits)",
            description="M16x200 mm anchor bolts, nuts, washers and grout fixing the structure to the foundations",
            category=ChecklistCategory.STRUCTURE,
        ),
        ChecklistItemCreate(
            title="Ground-mount grounding mesh",
            description=f"Grounding mesh with {foundations} interconnected copper-clad rods, 25 mm² bare cable",
            category=ChecklistCategory.STRUCTURE,
        ),
    ]


StructureCalculator = Callable[[int, int], List[ChecklistItemCreate]]

STRUCTURE_CALCULATORS: Dict[RoofType, StructureCalculator] = {
    RoofType.CERAMIC: _ceramic_items,
    RoofType.METAL: _metal_items,
    RoofType.FIBER_CEMENT: _fiber_cement_items,
    RoofType.GROUND_MOUNT: _ground_mount_items,
}


def structure_items(
    roof_type: Union[RoofType, str],
    panel_count: int,
    number_of_strings: int,
) -> List[ChecklistItemCreate]:
    """
    Mounting-structure items for a roof type.

    An unrecognized roof type yields an empty list instead of an error, so the
    project still gets its safety and electrical items.
    """
    try:
        roof_type = RoofType(roof_type)
    except ValueError:
        return []
    return STRUCTURE_CALCULATORS[roof_type](panel_count, number_of_strings)


def generate_checklist_items(
    panel_count: int,
    inverter_power_kw: float,
    roof_type: Union[RoofType, str],
) -> List[ChecklistItemCreate]:
    """
    Generate the full checklist for a project.

    Order is fixed: safety, then electrical materials, then structure.

    Args:
        panel_count: Number of 550 W panels (validated upstream, 1-200)
        inverter_power_kw: Inverter power; values below 3 kW are treated as 3 kW
        roof_type: Installation surface

    Returns:
        Items without project id or completion state
    """
    power_kw = adjusted_inverter_power_kw(inverter_power_kw)
    strings = string_configuration(panel_count)

    items: List[ChecklistItemCreate] = []
    items.extend(_safety_items(panel_count, strings))
    items.extend(_electrical_items(panel_count, power_kw, strings))
    items.extend(structure_items(roof_type, panel_count, strings.number_of_strings))
    return items
