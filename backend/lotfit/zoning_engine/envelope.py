"""
Buildable envelope: the lot rectangle eroded by its required yards.

Corner lots take the larger of the side yard and the street-side yard on
the side that faces the second street. The result is never clamped; when
yards exceed the lot the envelope comes back inverted and the evaluator
reports it as ENVELOPE_INVALID.
"""

from __future__ import annotations

from dataclasses import dataclass

from lotfit.models.schemas import Lot, Ruleset


@dataclass(frozen=True)
class Envelope:
    x0: float
    x1: float
    z0: float
    z1: float
    max_height_ft: float

    def to_dict(self) -> dict:
        return {
            "x0": self.x0,
            "x1": self.x1,
            "z0": self.z0,
            "z1": self.z1,
            "max_height_ft": self.max_height_ft,
        }


def lot_area_sq_ft(lot: Lot) -> float:
    return lot.width_ft * lot.depth_ft


def compute_envelope(lot: Lot, ruleset: Ruleset) -> Envelope:
    s = lot.setbacks_ft

    street_side_setback = (s.street_side or 0) if lot.is_corner else 0
    effective_left = s.side_left
    effective_right = s.side_right
    if lot.is_corner and lot.street_side == "left":
        effective_left = max(s.side_left, street_side_setback)
    if lot.is_corner and lot.street_side == "right":
        effective_right = max(s.side_right, street_side_setback)

    return Envelope(
        x0=effective_left,
        x1=lot.width_ft - effective_right,
        z0=s.front,
        z1=lot.depth_ft - s.rear,
        max_height_ft=ruleset.max_height_ft,
    )


def envelope_width_ft(env: Envelope) -> float:
    return env.x1 - env.x0


def envelope_depth_ft(env: Envelope) -> float:
    return env.z1 - env.z0
