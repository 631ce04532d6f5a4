"""Tests for the GeoJSON site plan export."""

from __future__ import annotations

import pytest
from shapely.geometry import shape

from lotfit.models.schemas import Lot, LotSetbacks
from lotfit.services.site_plan import build_site_plan
from lotfit.zoning_engine.catalog import get_lot_preset, get_preset_form, get_ruleset
from lotfit.zoning_engine.evaluate import evaluate_scenario


@pytest.fixture
def lot():
    return get_lot_preset("lot_50x150").lot


def _roles(plan: dict) -> list[str]:
    return [f["properties"]["role"] for f in plan["features"]]


class TestSitePlan:
    def test_two_flat_with_parking(self, lot):
        ev = evaluate_scenario(
            lot, get_ruleset("sample_current"), get_preset_form("two_flat"), 2, True,
        )
        plan = build_site_plan(lot, ev)
        assert plan["type"] == "FeatureCollection"
        assert _roles(plan) == ["lot", "envelope", "footprint", "stall", "stall", "aisle"]
        assert plan["properties"]["envelope_valid"] is True
        assert plan["properties"]["parking_fits"] is True

    def test_footprint_geometry(self, lot):
        ev = evaluate_scenario(lot, get_ruleset("sample_current"), get_preset_form("two_flat"), 2)
        plan = build_site_plan(lot, ev)
        footprint = next(f for f in plan["features"] if f["properties"]["role"] == "footprint")
        poly = shape(footprint["geometry"])
        assert poly.bounds == (10, 20, 40, 75)
        assert footprint["properties"]["area_sf"] == 1650
        assert footprint["properties"]["height_ft"] == 20

    def test_stalls_inside_lot(self, lot):
        ev = evaluate_scenario(lot, get_ruleset("sample_current"), get_preset_form("two_flat"), 8, True)
        plan = build_site_plan(lot, ev)
        lot_poly = shape(plan["features"][0]["geometry"])
        stalls = [f for f in plan["features"] if f["properties"]["role"] == "stall"]
        assert len(stalls) == 8
        assert [s["properties"]["index"] for s in stalls] == list(range(8))
        for stall in stalls:
            assert lot_poly.contains(shape(stall["geometry"]))

    def test_invalid_envelope_omitted(self):
        lot = Lot(
            width_ft=20,
            depth_ft=150,
            setbacks_ft=LotSetbacks(front=20, rear=30, side_left=12, side_right=12),
        )
        ev = evaluate_scenario(lot, get_ruleset("sample_current"), get_preset_form("two_flat"), 2)
        plan = build_site_plan(lot, ev)
        assert "envelope" not in _roles(plan)
        assert plan["properties"]["envelope_valid"] is False
