"""
Massing metrics for a preset on a lot.

Flat extrusion model: every story has the full footprint, no stepbacks.
Ratios against lot area are 0 on a zero-area lot.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass

from lotfit.models.schemas import Lot, PresetForm, Ruleset
from lotfit.zoning_engine.envelope import lot_area_sq_ft
from lotfit.zoning_engine.geometry import safe_div


@dataclass(frozen=True)
class BuildingMetrics:
    footprint_area_sq_ft: float
    gfa_sq_ft: float
    height_ft: float
    far_used: float
    coverage_used: float

    required_parking_spaces: int
    parking_coverage_debit_sq_ft: float
    effective_coverage_used: float  # footprint + parking debit, over lot area

    def to_dict(self) -> dict:
        return asdict(self)


def required_parking_spaces(units: int, ruleset: Ruleset) -> int:
    per_unit = ruleset.parking_min_spaces_per_unit or 0
    return math.ceil(units * per_unit)


def coverage_debit_per_space(ruleset: Ruleset, apply_coverage_debit: bool) -> float:
    """Square feet of lot coverage charged for each required space.

    Some jurisdictions count required-but-unbuilt parking against lot
    coverage. Only applies when the caller opts in and the ruleset sets a
    positive debit.
    """
    debit = ruleset.parking_coverage_debit_sq_ft_per_required_space or 0
    if apply_coverage_debit and debit > 0:
        return debit
    return 0.0


def compute_metrics(
    lot: Lot,
    ruleset: Ruleset,
    preset: PresetForm,
    apply_coverage_debit: bool = False,
) -> BuildingMetrics:
    lot_area = lot_area_sq_ft(lot)

    footprint_area = preset.footprint_width_ft * preset.footprint_depth_ft
    gfa = footprint_area * preset.stories
    height = preset.stories * preset.floor_to_floor_ft

    required = required_parking_spaces(preset.units, ruleset)
    debit = required * coverage_debit_per_space(ruleset, apply_coverage_debit)

    return BuildingMetrics(
        footprint_area_sq_ft=footprint_area,
        gfa_sq_ft=gfa,
        height_ft=height,
        far_used=safe_div(gfa, lot_area),
        coverage_used=safe_div(footprint_area, lot_area),
        required_parking_spaces=required,
        parking_coverage_debit_sq_ft=debit,
        effective_coverage_used=safe_div(footprint_area + debit, lot_area),
    )
