"""Tests for plan-view rectangle primitives."""

from __future__ import annotations

import pytest

from lotfit.zoning_engine.geometry import (
    Rect,
    rect_area,
    rect_center,
    rect_depth,
    rect_width,
    safe_div,
)


class TestRectMeasures:
    def test_width_depth_area(self):
        r = Rect(x0=5, x1=45, z0=20, z1=120)
        assert rect_width(r) == 40
        assert rect_depth(r) == 100
        assert rect_area(r) == 4000

    def test_center(self):
        r = Rect(x0=10, x1=40, z0=20, z1=75)
        assert rect_center(r) == (25, 47.5)

    def test_inverted_rect_has_negative_width(self):
        """No validation: callers decide what a negative measure means."""
        r = Rect(x0=30, x1=20, z0=0, z1=10)
        assert rect_width(r) == -10
        assert rect_area(r) == -100

    def test_polygon_matches_bounds(self):
        poly = Rect(x0=16, x1=34, z0=132, z1=150).to_polygon()
        assert poly.bounds == (16, 132, 34, 150)
        assert poly.area == pytest.approx(18 * 18)


class TestSafeDiv:
    def test_normal_division(self):
        assert safe_div(3300, 7500) == pytest.approx(0.44)

    def test_zero_denominator(self):
        assert safe_div(100, 0) == 0

    def test_negative_denominator(self):
        assert safe_div(100, -5) == 0
