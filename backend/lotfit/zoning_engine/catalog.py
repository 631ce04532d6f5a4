"""
Fixed catalogs of lot presets, rulesets and housing forms.

Lookups return None for an unknown id. Falling back to a default id
happens in one place, `resolve_scenario`, so the evaluator only ever sees
resolved records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from lotfit.config import settings
from lotfit.models.schemas import (
    Lot,
    LotPreset,
    LotSetbacks,
    ParkingConfig,
    PresetForm,
    Ruleset,
    ScenarioConfig,
)

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────
# CATALOGS
# ──────────────────────────────────────────────────────────────────

LOT_PRESETS: tuple[LotPreset, ...] = (
    LotPreset(
        id="lot_50x150",
        name="Typical 50' x 150'",
        lot=Lot(
            width_ft=50,
            depth_ft=150,
            is_corner=False,
            street_side="right",
            setbacks_ft=LotSetbacks(front=20, rear=30, side_left=5, side_right=5),
        ),
    ),
    LotPreset(
        id="lot_37_5x125",
        name="Typical 37.5' x 125'",
        lot=Lot(
            width_ft=37.5,
            depth_ft=125,
            is_corner=False,
            street_side="right",
            setbacks_ft=LotSetbacks(front=20, rear=25, side_left=3, side_right=3),
        ),
    ),
    LotPreset(
        id="lot_corner_50x150",
        name="Corner 50' x 150'",
        lot=Lot(
            width_ft=50,
            depth_ft=150,
            is_corner=True,
            street_side="right",
            setbacks_ft=LotSetbacks(
                front=20, rear=30, side_left=5, side_right=5, street_side=15,
            ),
        ),
    ),
)

RULESETS: tuple[Ruleset, ...] = (
    Ruleset(
        id="sample_current",
        name="Sample Low-Rise Residential",
        version_label="Current (Sample)",
        notes=(
            "Placeholder ruleset for scaffolding. Replace with "
            "jurisdiction-specific data and sources."
        ),
        max_height_ft=35,
        max_far=0.9,
        max_lot_coverage_pct=0.4,
        min_lot_width_ft=25,
        min_lot_area_sq_ft=2500,
        parking_min_spaces_per_unit=1,
        parking_coverage_debit_sq_ft_per_required_space=0,
    ),
    Ruleset(
        id="sample_proposed",
        name="Sample Low-Rise Residential",
        version_label="Proposed (Sample: No Parking Minimum)",
        notes="Demonstration ruleset: parking minimums removed, massing limits unchanged.",
        max_height_ft=35,
        max_far=0.9,
        max_lot_coverage_pct=0.4,
        min_lot_width_ft=25,
        min_lot_area_sq_ft=2500,
        parking_min_spaces_per_unit=0,
        parking_coverage_debit_sq_ft_per_required_space=0,
    ),
)

PRESET_FORMS: tuple[PresetForm, ...] = (
    PresetForm(
        id="baseline_sfh",
        name="Max Single-Family (Baseline)",
        description="A simple baseline mass within typical low-rise caps.",
        kind="baseline_sfh",
        units=1, stories=2, floor_to_floor_ft=10,
        footprint_width_ft=28, footprint_depth_ft=45,
    ),
    PresetForm(
        id="two_flat",
        name="Classic 2-flat",
        description="Two units stacked over two stories.",
        kind="stacked_flats",
        units=2, stories=2, floor_to_floor_ft=10,
        footprint_width_ft=30, footprint_depth_ft=55,
    ),
    PresetForm(
        id="triplex",
        name="Missing middle triplex",
        description="Three units over three stories.",
        kind="stacked_flats",
        units=3, stories=3, floor_to_floor_ft=10,
        footprint_width_ft=30, footprint_depth_ft=55,
    ),
    PresetForm(
        id="four_flat",
        name="4-flat",
        description="Four units over three stories (larger floor plate).",
        kind="stacked_flats",
        units=4, stories=3, floor_to_floor_ft=10,
        footprint_width_ft=34, footprint_depth_ft=60,
    ),
    PresetForm(
        id="six_flat",
        name="3-story 6-flat (small apartment)",
        description="Six units over three stories (simple massing).",
        kind="stacked_flats",
        units=6, stories=3, floor_to_floor_ft=10,
        footprint_width_ft=38, footprint_depth_ft=75,
    ),
    PresetForm(
        id="townhouse_row",
        name="Townhouse row",
        description="Four attached townhomes (conceptual massing).",
        kind="townhouse",
        units=4, stories=3, floor_to_floor_ft=10,
        footprint_width_ft=40, footprint_depth_ft=50,
    ),
)


# ──────────────────────────────────────────────────────────────────
# LOOKUPS
# ──────────────────────────────────────────────────────────────────

def get_lot_preset(lot_preset_id: str) -> Optional[LotPreset]:
    return next((p for p in LOT_PRESETS if p.id == lot_preset_id), None)


def get_ruleset(ruleset_id: str) -> Optional[Ruleset]:
    return next((r for r in RULESETS if r.id == ruleset_id), None)


def get_preset_form(preset_id: str) -> Optional[PresetForm]:
    return next((p for p in PRESET_FORMS if p.id == preset_id), None)


def match_lot_preset(lot: Lot) -> Optional[str]:
    """Id of the catalog lot that equals `lot` field for field, else None."""
    for preset in LOT_PRESETS:
        if preset.lot == lot:
            return preset.id
    return None


def clone_lot(lot: Lot) -> Lot:
    return lot.model_copy(deep=True)


# ──────────────────────────────────────────────────────────────────
# BOUNDARY RESOLUTION
# ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ResolvedScenario:
    """A scenario whose catalog references have been replaced by records."""
    lot: Lot
    ruleset: Ruleset
    preset: PresetForm
    parking: ParkingConfig


def _default_ruleset() -> Ruleset:
    return get_ruleset(settings.default_ruleset_id) or RULESETS[0]


def _default_preset_form() -> PresetForm:
    return get_preset_form(settings.default_preset_id) or PRESET_FORMS[0]


def resolve_scenario(config: ScenarioConfig) -> ResolvedScenario:
    """Swap catalog ids for records, substituting defaults for unknown ids."""
    ruleset = get_ruleset(config.ruleset_id)
    if ruleset is None:
        ruleset = _default_ruleset()
        logger.warning(
            "Unknown ruleset id %r, falling back to %r", config.ruleset_id, ruleset.id,
        )

    preset = get_preset_form(config.preset_id)
    if preset is None:
        preset = _default_preset_form()
        logger.warning(
            "Unknown preset id %r, falling back to %r", config.preset_id, preset.id,
        )

    return ResolvedScenario(
        lot=config.lot,
        ruleset=ruleset,
        preset=preset,
        parking=config.parking,
    )


def normalize_scenario(config: ScenarioConfig) -> ScenarioConfig:
    """Copy of `config` whose ids all name catalog entries."""
    resolved = resolve_scenario(config)
    return config.model_copy(update={
        "ruleset_id": resolved.ruleset.id,
        "preset_id": resolved.preset.id,
    })


def default_scenarios() -> tuple[ScenarioConfig, ScenarioConfig]:
    """The A/B pair a fresh compare session starts from.

    A is the current ruleset with parking drawn; B is the proposed ruleset
    with no parking. Each holds its own copy of the default lot.
    """
    lot_preset = get_lot_preset(settings.default_lot_preset_id) or LOT_PRESETS[0]
    scenario_a = ScenarioConfig(
        lot=clone_lot(lot_preset.lot),
        ruleset_id="sample_current",
        preset_id="two_flat",
        parking=ParkingConfig(provided_spaces=2, show_geometry=True, apply_coverage_debit=False),
    )
    scenario_b = ScenarioConfig(
        lot=clone_lot(lot_preset.lot),
        ruleset_id="sample_proposed",
        preset_id="two_flat",
        parking=ParkingConfig(provided_spaces=0, show_geometry=False, apply_coverage_debit=False),
    )
    return scenario_a, scenario_b
