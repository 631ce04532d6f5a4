"""
Scenario evaluator: one lot, one ruleset, one housing form.

Runs envelope -> placement -> metrics -> rule checks -> parking layout ->
binding constraint and returns a single immutable Evaluation. Problems are
reported as violations, never raised.

Usage::

    from lotfit.zoning_engine.evaluate import evaluate_scenario
    result = evaluate_scenario(lot, ruleset, preset, 2, False, False)
    result.binding.label
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional, Sequence

from lotfit.models.schemas import Lot, PresetForm, Ruleset
from lotfit.zoning_engine.envelope import (
    Envelope,
    compute_envelope,
    envelope_depth_ft,
    envelope_width_ft,
    lot_area_sq_ft,
)
from lotfit.zoning_engine.geometry import Rect, rect_depth, rect_width, safe_div
from lotfit.zoning_engine.metrics import BuildingMetrics, compute_metrics
from lotfit.zoning_engine.parking_layout import SurfaceParkingLayout, layout_surface_parking
from lotfit.zoning_engine.placement import BuildingPlacement, place_preset_in_envelope

logger = logging.getLogger(__name__)

# Absorbs floating-point noise on every cap comparison
TOLERANCE = 1e-6


# ──────────────────────────────────────────────────────────────────
# DATA CLASSES
# ──────────────────────────────────────────────────────────────────

class ViolationCode(str, Enum):
    ENVELOPE_INVALID = "ENVELOPE_INVALID"
    OUTSIDE_ENVELOPE = "OUTSIDE_ENVELOPE"
    HEIGHT = "HEIGHT"
    FAR = "FAR"
    COVERAGE = "COVERAGE"
    MIN_LOT_WIDTH = "MIN_LOT_WIDTH"
    MIN_LOT_AREA = "MIN_LOT_AREA"
    PARKING_UNDERPROVIDED = "PARKING_UNDERPROVIDED"
    PARKING_DOES_NOT_FIT = "PARKING_DOES_NOT_FIT"


# "Can it physically fit" first, then the headline caps, then the minimums.
VIOLATION_PRIORITY: tuple[ViolationCode, ...] = (
    ViolationCode.OUTSIDE_ENVELOPE,
    ViolationCode.HEIGHT,
    ViolationCode.FAR,
    ViolationCode.COVERAGE,
    ViolationCode.PARKING_DOES_NOT_FIT,
    ViolationCode.PARKING_UNDERPROVIDED,
    ViolationCode.MIN_LOT_WIDTH,
    ViolationCode.MIN_LOT_AREA,
    ViolationCode.ENVELOPE_INVALID,
)


class BindingKind(str, Enum):
    VIOLATION = "violation"
    BINDING = "binding"


@dataclass(frozen=True)
class Violation:
    code: ViolationCode
    message: str

    def to_dict(self) -> dict:
        return {"code": self.code.value, "message": self.message}


@dataclass(frozen=True)
class BindingInfo:
    """Headline explanation: the deciding violation, or the tightest limit."""
    kind: BindingKind
    label: str
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "label": self.label, "detail": self.detail}


@dataclass(frozen=True)
class Evaluation:
    envelope: Envelope
    placement: BuildingPlacement
    metrics: BuildingMetrics
    parking_layout: SurfaceParkingLayout
    violations: tuple[Violation, ...]
    binding: BindingInfo

    def to_dict(self) -> dict:
        return {
            "envelope": self.envelope.to_dict(),
            "placement": self.placement.to_dict(),
            "metrics": self.metrics.to_dict(),
            "parking_layout": self.parking_layout.to_dict(),
            "violations": [v.to_dict() for v in self.violations],
            "binding": self.binding.to_dict(),
        }


# ──────────────────────────────────────────────────────────────────
# RULE CHECKS
# ──────────────────────────────────────────────────────────────────

def _fixed(value: float, places: int) -> str:
    """Fixed-point text with halves rounded away from zero (62.5 -> "63")."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _outside_envelope(footprint: Rect, envelope: Envelope) -> bool:
    return (
        footprint.x0 < envelope.x0 - TOLERANCE
        or footprint.x1 > envelope.x1 + TOLERANCE
        or footprint.z0 < envelope.z0 - TOLERANCE
        or footprint.z1 > envelope.z1 + TOLERANCE
    )


def check_violations(
    lot: Lot,
    ruleset: Ruleset,
    envelope: Envelope,
    footprint: Rect,
    metrics: BuildingMetrics,
    provided_parking_spaces: int,
) -> list[Violation]:
    """Every non-parking-geometry check, in reporting order. None short-circuit."""
    violations: list[Violation] = []

    if envelope_width_ft(envelope) <= 0 or envelope_depth_ft(envelope) <= 0:
        violations.append(Violation(
            ViolationCode.ENVELOPE_INVALID,
            "Setbacks leave no buildable area (envelope is invalid).",
        ))

    if _outside_envelope(footprint, envelope):
        violations.append(Violation(
            ViolationCode.OUTSIDE_ENVELOPE,
            "Building footprint exceeds the setback envelope.",
        ))

    if metrics.height_ft > ruleset.max_height_ft + TOLERANCE:
        violations.append(Violation(
            ViolationCode.HEIGHT,
            f"Building height ({_fixed(metrics.height_ft, 1)} ft) exceeds "
            f"max height ({_fixed(ruleset.max_height_ft, 1)} ft).",
        ))

    if metrics.far_used > ruleset.max_far + TOLERANCE:
        violations.append(Violation(
            ViolationCode.FAR,
            f"FAR ({_fixed(metrics.far_used, 2)}) exceeds max FAR ({_fixed(ruleset.max_far, 2)}).",
        ))

    if metrics.effective_coverage_used > ruleset.max_lot_coverage_pct + TOLERANCE:
        violations.append(Violation(
            ViolationCode.COVERAGE,
            f"Lot coverage ({_fixed(metrics.effective_coverage_used * 100, 1)}%) exceeds "
            f"max coverage ({_fixed(ruleset.max_lot_coverage_pct * 100, 1)}%).",
        ))

    if ruleset.min_lot_width_ft is not None and lot.width_ft + TOLERANCE < ruleset.min_lot_width_ft:
        violations.append(Violation(
            ViolationCode.MIN_LOT_WIDTH,
            f"Lot width ({_fixed(lot.width_ft, 1)} ft) is below "
            f"the minimum ({_fixed(ruleset.min_lot_width_ft, 1)} ft).",
        ))

    if ruleset.min_lot_area_sq_ft is not None:
        area = lot_area_sq_ft(lot)
        if area + TOLERANCE < ruleset.min_lot_area_sq_ft:
            violations.append(Violation(
                ViolationCode.MIN_LOT_AREA,
                f"Lot area ({_fixed(area, 0)} sf) is below "
                f"the minimum ({_fixed(ruleset.min_lot_area_sq_ft, 0)} sf).",
            ))

    if provided_parking_spaces + TOLERANCE < metrics.required_parking_spaces:
        violations.append(Violation(
            ViolationCode.PARKING_UNDERPROVIDED,
            f"Provided parking ({provided_parking_spaces}) is below "
            f"required parking ({metrics.required_parking_spaces}).",
        ))

    return violations


# ──────────────────────────────────────────────────────────────────
# BINDING CONSTRAINT
# ──────────────────────────────────────────────────────────────────

def compute_binding(
    envelope: Envelope,
    footprint: Rect,
    metrics: BuildingMetrics,
    ruleset: Ruleset,
    violations: Sequence[Violation],
) -> BindingInfo:
    """Pick the single constraint to headline.

    With violations, the first code in VIOLATION_PRIORITY that is present
    wins. Without, the dimension with the highest utilization is reported
    as tight; ties keep the order width, depth, height, FAR, coverage.
    """
    if violations:
        by_code = {}
        for v in violations:
            by_code.setdefault(v.code, v)
        top = next(
            (by_code[code] for code in VIOLATION_PRIORITY if code in by_code),
            violations[0],
        )
        detail = None
        if len(violations) > 1:
            detail = f"{len(violations) - 1} other violation(s) also apply."
        return BindingInfo(kind=BindingKind.VIOLATION, label=top.message, detail=detail)

    width_use = safe_div(rect_width(footprint), envelope_width_ft(envelope))
    depth_use = safe_div(rect_depth(footprint), envelope_depth_ft(envelope))
    height_use = safe_div(metrics.height_ft, ruleset.max_height_ft)
    far_use = safe_div(metrics.far_used, ruleset.max_far)
    coverage_use = safe_div(metrics.effective_coverage_used, ruleset.max_lot_coverage_pct)

    candidates = [
        (width_use, f"Envelope width is tight ({_fixed(width_use * 100, 0)}% used)."),
        (depth_use, f"Envelope depth is tight ({_fixed(depth_use * 100, 0)}% used)."),
        (height_use, f"Height is tight ({_fixed(height_use * 100, 0)}% used)."),
        (far_use, f"FAR is tight ({_fixed(far_use * 100, 0)}% used)."),
        (coverage_use, f"Lot coverage is tight ({_fixed(coverage_use * 100, 0)}% used)."),
    ]
    # sorted() is stable, so equal ratios keep their listed order
    candidates = sorted(candidates, key=lambda c: c[0], reverse=True)
    return BindingInfo(kind=BindingKind.BINDING, label=candidates[0][1])


# ──────────────────────────────────────────────────────────────────
# MAIN ENTRY
# ──────────────────────────────────────────────────────────────────

def evaluate_scenario(
    lot: Lot,
    ruleset: Ruleset,
    preset: PresetForm,
    provided_parking_spaces: int = 0,
    show_parking_geometry: bool = False,
    apply_coverage_debit: bool = False,
) -> Evaluation:
    """Evaluate one housing form on one lot under one ruleset.

    Args:
        lot: Lot dimensions and setbacks
        ruleset: Zoning caps and parking rules
        preset: Housing massing template
        provided_parking_spaces: Spaces the proposal provides
        show_parking_geometry: Lay out the provided spaces and check they fit
        apply_coverage_debit: Charge required parking against lot coverage

    Returns Evaluation. Pure: identical inputs give identical output.
    """
    envelope = compute_envelope(lot, ruleset)
    placement = place_preset_in_envelope(envelope, preset)
    metrics = compute_metrics(lot, ruleset, preset, apply_coverage_debit)

    violations = check_violations(
        lot, ruleset, envelope, placement.footprint, metrics, provided_parking_spaces,
    )

    wants_geometry = show_parking_geometry and provided_parking_spaces > 0
    if wants_geometry:
        parking_layout = layout_surface_parking(
            lot,
            behind_building_z=placement.footprint.z1,
            spaces=provided_parking_spaces,
        )
    else:
        parking_layout = SurfaceParkingLayout(fits=True)

    if wants_geometry and not parking_layout.fits:
        violations.append(Violation(
            ViolationCode.PARKING_DOES_NOT_FIT,
            parking_layout.reason or "Provided parking does not fit in the rear yard layout.",
        ))

    binding = compute_binding(envelope, placement.footprint, metrics, ruleset, violations)

    logger.debug(
        "Evaluated %s under %s: %d violation(s), binding=%s",
        preset.id, ruleset.id, len(violations), binding.label,
    )

    return Evaluation(
        envelope=envelope,
        placement=placement,
        metrics=metrics,
        parking_layout=parking_layout,
        violations=tuple(violations),
        binding=binding,
    )
