"""
Plan-view rectangle primitives.

Coordinates are lot-local feet: x runs across the lot from the left
property line, z runs back from the front property line. Nothing here
validates orientation; a rectangle with x1 < x0 simply has negative width.
"""

from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry import Polygon, box


@dataclass(frozen=True)
class Rect:
    x0: float
    x1: float
    z0: float
    z1: float

    def to_polygon(self) -> Polygon:
        return box(self.x0, self.z0, self.x1, self.z1)

    def to_dict(self) -> dict:
        return {"x0": self.x0, "x1": self.x1, "z0": self.z0, "z1": self.z1}


def rect_width(r: Rect) -> float:
    return r.x1 - r.x0


def rect_depth(r: Rect) -> float:
    return r.z1 - r.z0


def rect_area(r: Rect) -> float:
    return rect_width(r) * rect_depth(r)


def rect_center(r: Rect) -> tuple[float, float]:
    """(x, z) midpoint."""
    return (r.x0 + r.x1) / 2, (r.z0 + r.z1) / 2


def safe_div(numerator: float, denominator: float) -> float:
    """Ratio that is 0 instead of an error when the denominator is <= 0."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator
