"""Tests for the rear-yard surface parking layout engine.

Covers the capacity pre-checks, the rear-anchored geometry, fill order and
the building-placement guard.
"""

from __future__ import annotations

import pytest

from lotfit.models.schemas import Lot, LotSetbacks
from lotfit.zoning_engine.catalog import get_lot_preset, get_preset_form, get_ruleset
from lotfit.zoning_engine.envelope import compute_envelope
from lotfit.zoning_engine.geometry import rect_depth, rect_width
from lotfit.zoning_engine.parking_layout import (
    AISLE_DEPTH_FT,
    REASON_BUILDING_PLACEMENT,
    REASON_NO_DEPTH,
    REASON_NO_WIDTH,
    STALL_DEPTH_FT,
    STALL_WIDTH_FT,
    layout_surface_parking,
)
from lotfit.zoning_engine.placement import place_preset_in_envelope


@pytest.fixture
def lot():
    return get_lot_preset("lot_50x150").lot


def _make_lot(width: float = 50, depth: float = 150) -> Lot:
    return Lot(
        width_ft=width,
        depth_ft=depth,
        setbacks_ft=LotSetbacks(front=20, rear=30, side_left=5, side_right=5),
    )


# ──────────────────────────────────────────────────────────────────
# TRIVIAL REQUESTS
# ──────────────────────────────────────────────────────────────────

class TestZeroSpaces:
    def test_zero_fits_with_no_stalls(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=0)
        assert layout.fits is True
        assert layout.stalls == ()
        assert layout.aisle is None

    def test_negative_treated_as_zero(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=-3)
        assert layout.fits is True
        assert layout.stalls == ()

    def test_fractional_request_is_floored(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=2.9)
        assert len(layout.stalls) == 2


# ──────────────────────────────────────────────────────────────────
# TYPICAL 2-FLAT REAR YARD
# ──────────────────────────────────────────────────────────────────

class TestTwoFlatRearYard:
    def test_two_stalls_behind_two_flat(self, lot):
        """Footprint rear edge at z=75 leaves room for a two-row lot."""
        envelope = compute_envelope(lot, get_ruleset("sample_current"))
        placement = place_preset_in_envelope(envelope, get_preset_form("two_flat"))
        assert placement.footprint.z1 == 75

        layout = layout_surface_parking(lot, behind_building_z=placement.footprint.z1, spaces=2)
        assert layout.fits is True
        assert len(layout.stalls) == 2
        assert layout.aisle is not None
        assert layout.reason is None

    def test_rear_row_anchored_to_rear_lot_line(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=2)
        for stall in layout.stalls:
            assert stall.z1 == 150
            assert stall.z0 == 150 - STALL_DEPTH_FT

    def test_block_centered_across_lot(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=2)
        assert layout.stalls[0].x0 == 16
        assert layout.stalls[1].x1 == 34

    def test_stall_dimensions(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=2)
        for stall in layout.stalls:
            assert rect_width(stall) == STALL_WIDTH_FT
            assert rect_depth(stall) == STALL_DEPTH_FT

    def test_aisle_sits_in_front_of_rear_row(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=2)
        assert layout.aisle.z1 == 132
        assert layout.aisle.z0 == 132 - AISLE_DEPTH_FT
        assert layout.aisle.x0 == 16
        assert layout.aisle.x1 == 34


# ──────────────────────────────────────────────────────────────────
# FILL ORDER
# ──────────────────────────────────────────────────────────────────

class TestFillOrder:
    def test_rear_row_filled_before_front_row(self, lot):
        """5 stalls per row on a 50 ft lot; the sixth goes to the front row."""
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=6)
        assert layout.fits is True
        rear = [s for s in layout.stalls if s.z1 == 150]
        front = [s for s in layout.stalls if s.z1 == 108]
        assert len(rear) == 5
        assert len(front) == 1
        assert list(layout.stalls[:5]) == rear

    def test_rows_filled_left_to_right(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=4)
        xs = [s.x0 for s in layout.stalls]
        assert xs == sorted(xs)

    def test_front_row_starts_behind_building(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=10)
        assert layout.fits is True
        assert min(s.z0 for s in layout.stalls) >= 77

    def test_full_capacity(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=10)
        assert len(layout.stalls) == 10


# ──────────────────────────────────────────────────────────────────
# PRE-CHECK FAILURES
# ──────────────────────────────────────────────────────────────────

class TestPreCheckFailures:
    def test_lot_too_narrow(self):
        layout = layout_surface_parking(_make_lot(width=8), behind_building_z=75, spaces=1)
        assert layout.fits is False
        assert layout.reason == REASON_NO_WIDTH
        assert layout.stalls == ()
        assert layout.aisle is None

    def test_rear_yard_too_shallow(self, lot):
        """150 - (110 + 2) = 38 ft < 18 + 24 ft."""
        layout = layout_surface_parking(lot, behind_building_z=110, spaces=1)
        assert layout.fits is False
        assert layout.reason == REASON_NO_DEPTH
        assert layout.stalls == ()

    def test_single_row_when_depth_allows_one(self, lot):
        """150 - (100 + 2) = 48 ft: one row of 5."""
        layout = layout_surface_parking(lot, behind_building_z=100, spaces=5)
        assert layout.fits is True
        assert all(s.z1 == 150 for s in layout.stalls)
        assert layout.aisle.z0 == 108

    def test_over_capacity_reports_capacity(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=100, spaces=6)
        assert layout.fits is False
        assert layout.reason == "Only 5 spaces fit in the rear yard layout."
        assert layout.stalls == ()

    def test_over_two_row_capacity(self, lot):
        layout = layout_surface_parking(lot, behind_building_z=75, spaces=11)
        assert layout.fits is False
        assert "Only 10 spaces" in layout.reason


# ──────────────────────────────────────────────────────────────────
# BUILDING PLACEMENT GUARD
# ──────────────────────────────────────────────────────────────────

class TestBuildingPlacementGuard:
    def test_guard_rejects_aisle_reaching_into_clearance(self, lot):
        """Degenerate stall geometry passes the depth pre-check but anchors
        the aisle in front of the building clearance line."""
        layout = layout_surface_parking(
            lot, behind_building_z=138, spaces=1, stall_depth_ft=-10,
        )
        assert layout.fits is False
        assert layout.reason == REASON_BUILDING_PLACEMENT
        assert layout.stalls == ()
        assert layout.aisle is None

    def test_rows_start_at_or_behind_clearance_line(self, lot):
        """88 + 2 ft clearance leaves exactly two rows plus aisle."""
        layout = layout_surface_parking(lot, behind_building_z=88, spaces=10)
        assert layout.fits is True
        assert min(s.z0 for s in layout.stalls) == 90


# ──────────────────────────────────────────────────────────────────
# MONOTONICITY
# ──────────────────────────────────────────────────────────────────

class TestMonotonicity:
    @pytest.mark.parametrize("behind_z", [60, 75, 90, 100])
    def test_fewer_spaces_also_fit(self, lot, behind_z):
        largest = 0
        for n in range(1, 12):
            if layout_surface_parking(lot, behind_building_z=behind_z, spaces=n).fits:
                largest = n
        for n in range(1, largest + 1):
            smaller = layout_surface_parking(lot, behind_building_z=behind_z, spaces=n)
            bigger = layout_surface_parking(lot, behind_building_z=behind_z, spaces=largest)
            assert smaller.fits is True
            assert len(smaller.stalls) == n
            # Same anchoring: every rear-row stall of the smaller layout sits on the rear line
            assert {s.z1 for s in smaller.stalls} <= {s.z1 for s in bigger.stalls}
