"""
Surface parking layout engine.

Packs the provided parking stalls into the rear yard behind the building
footprint as a deterministic two-row surface lot:

  rear lot line  ┌──────────────┐
                 │  rear row    │  stall depth
                 ├──────────────┤
                 │  drive aisle │  aisle depth
                 ├──────────────┤
                 │  front row   │  stall depth (two-row layouts only)
                 └──────────────┘
                   clearance
  building rear  ════════════════

The layout is anchored to the rear property line and built forward, so
stalls sit as far from the building and street as the lot allows. The stall
block is centered across the full lot width.

Feasibility is decided in two phases: a width/depth/capacity pre-check,
then a verification that the anchored rows and aisle all start behind the
building plus clearance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from lotfit.models.schemas import Lot
from lotfit.zoning_engine.geometry import Rect


# ──────────────────────────────────────────────────────────────────
# CONSTANTS
# ──────────────────────────────────────────────────────────────────

STALL_WIDTH_FT = 9
STALL_DEPTH_FT = 18
AISLE_DEPTH_FT = 24       # Two-way drive aisle
CLEARANCE_FT = 2          # Gap between building rear wall and parking

REASON_NO_WIDTH = "Not enough lot width for even one parking stall."
REASON_NO_DEPTH = "Not enough rear yard depth for parking + aisle."
REASON_BUILDING_PLACEMENT = "Rear yard depth is constrained by building placement."


@dataclass(frozen=True)
class SurfaceParkingLayout:
    """Result of packing stalls into the rear yard."""
    fits: bool
    stalls: tuple[Rect, ...] = ()
    aisle: Optional[Rect] = None
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "fits": self.fits,
            "reason": self.reason,
            "stalls": [s.to_dict() for s in self.stalls],
            "aisle": self.aisle.to_dict() if self.aisle else None,
        }


# ──────────────────────────────────────────────────────────────────
# HELPERS
# ──────────────────────────────────────────────────────────────────

def _row_count(available_depth: float, stall_depth: float, aisle_depth: float) -> int:
    """Rows that fit front-to-back: 2, 1, or 0."""
    if available_depth >= stall_depth * 2 + aisle_depth:
        return 2
    if available_depth >= stall_depth + aisle_depth:
        return 1
    return 0


def _row_stalls(
    x_start: float,
    z0: float,
    z1: float,
    count: int,
    stall_width: float,
) -> list[Rect]:
    """Stalls laid left-to-right from x_start."""
    return [
        Rect(
            x0=x_start + i * stall_width,
            x1=x_start + (i + 1) * stall_width,
            z0=z0,
            z1=z1,
        )
        for i in range(count)
    ]


# ──────────────────────────────────────────────────────────────────
# MAIN ENTRY
# ──────────────────────────────────────────────────────────────────

def layout_surface_parking(
    lot: Lot,
    behind_building_z: float,
    spaces: float,
    stall_width_ft: float = STALL_WIDTH_FT,
    stall_depth_ft: float = STALL_DEPTH_FT,
    aisle_depth_ft: float = AISLE_DEPTH_FT,
    clearance_ft: float = CLEARANCE_FT,
) -> SurfaceParkingLayout:
    """Pack `spaces` stalls into the rear yard behind the building.

    Args:
        lot: The lot; its full width and depth bound the layout
        behind_building_z: z of the building footprint's rear face
        spaces: Requested stall count (floored, negative treated as 0)
        stall_width_ft: Stall width across the lot
        stall_depth_ft: Stall depth front-to-back
        aisle_depth_ft: Drive aisle depth front-to-back
        clearance_ft: Required gap behind the building

    Returns SurfaceParkingLayout. Width, depth and capacity failures return
    no stalls and no aisle.
    """
    spaces = max(0, math.floor(spaces))
    if spaces == 0:
        return SurfaceParkingLayout(fits=True)

    x_min = 0.0
    available_width = lot.width_ft - x_min

    z_start = behind_building_z + clearance_ft
    z_end = lot.depth_ft
    available_depth = z_end - z_start

    # ── Phase 1: capacity pre-check ──
    stalls_per_row = math.floor(available_width / stall_width_ft)
    if stalls_per_row <= 0:
        return SurfaceParkingLayout(fits=False, reason=REASON_NO_WIDTH)

    rows = _row_count(available_depth, stall_depth_ft, aisle_depth_ft)
    if rows == 0:
        return SurfaceParkingLayout(fits=False, reason=REASON_NO_DEPTH)

    capacity = rows * stalls_per_row
    if spaces > capacity:
        return SurfaceParkingLayout(
            fits=False,
            reason=f"Only {capacity} spaces fit in the rear yard layout.",
        )

    used_per_row = min(stalls_per_row, spaces)
    block_width = used_per_row * stall_width_ft
    x_start = x_min + (available_width - block_width) / 2

    # ── Phase 2: anchor to the rear lot line and build forward ──
    rear_row_z1 = z_end
    rear_row_z0 = rear_row_z1 - stall_depth_ft

    aisle_z1 = rear_row_z0
    aisle_z0 = aisle_z1 - aisle_depth_ft
    aisle = Rect(x0=x_start, x1=x_start + block_width, z0=aisle_z0, z1=aisle_z1)

    front_row_z1 = aisle_z0
    front_row_z0 = front_row_z1 - stall_depth_ft

    if (
        rear_row_z0 < z_start
        or (rows == 2 and front_row_z0 < z_start)
        or aisle.z0 < z_start
    ):
        return SurfaceParkingLayout(fits=False, reason=REASON_BUILDING_PLACEMENT)

    # Rear row first, then the front row
    remaining = spaces
    rear_count = min(used_per_row, remaining)
    stalls = _row_stalls(x_start, rear_row_z0, rear_row_z1, rear_count, stall_width_ft)
    remaining -= rear_count

    if rows == 2 and remaining > 0:
        front_count = min(used_per_row, remaining)
        stalls.extend(
            _row_stalls(x_start, front_row_z0, front_row_z1, front_count, stall_width_ft)
        )
        remaining -= front_count

    return SurfaceParkingLayout(fits=remaining == 0, stalls=tuple(stalls), aisle=aisle)
