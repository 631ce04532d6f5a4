"""
GeoJSON site plan of an evaluation.

Lot-local feet: GeoJSON x is the lot's x (across the frontage), GeoJSON y
is the lot's z (back from the front property line). Consumed by the 3D
viewer and the print sheet, which draw whatever features are present.
"""

from __future__ import annotations

import json

from shapely.geometry import Polygon, box

from lotfit.models.schemas import Lot
from lotfit.zoning_engine.envelope import envelope_depth_ft, envelope_width_ft
from lotfit.zoning_engine.evaluate import Evaluation


def _feature(poly: Polygon, role: str, **properties) -> dict:
    return {
        "type": "Feature",
        "geometry": json.loads(json.dumps(poly.__geo_interface__)),
        "properties": {"role": role, "area_sf": round(poly.area, 2), **properties},
    }


def build_site_plan(lot: Lot, evaluation: Evaluation) -> dict:
    """FeatureCollection with lot, envelope, footprint, stalls and aisle.

    A degenerate envelope has no buildable polygon and is left out; the
    collection's `envelope_valid` property says so.
    """
    features = [_feature(box(0, 0, lot.width_ft, lot.depth_ft), "lot")]

    env = evaluation.envelope
    envelope_valid = envelope_width_ft(env) > 0 and envelope_depth_ft(env) > 0
    if envelope_valid:
        features.append(_feature(
            box(env.x0, env.z0, env.x1, env.z1),
            "envelope",
            max_height_ft=env.max_height_ft,
        ))

    features.append(_feature(
        evaluation.placement.footprint.to_polygon(),
        "footprint",
        height_ft=evaluation.metrics.height_ft,
    ))

    layout = evaluation.parking_layout
    for i, stall in enumerate(layout.stalls):
        features.append(_feature(stall.to_polygon(), "stall", index=i))
    if layout.aisle is not None:
        features.append(_feature(layout.aisle.to_polygon(), "aisle"))

    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": {
            "units": "ft",
            "envelope_valid": envelope_valid,
            "parking_fits": layout.fits,
        },
    }
