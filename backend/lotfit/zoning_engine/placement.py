from __future__ import annotations

from dataclasses import dataclass

from lotfit.models.schemas import PresetForm
from lotfit.zoning_engine.envelope import Envelope, envelope_depth_ft
from lotfit.zoning_engine.geometry import Rect


@dataclass(frozen=True)
class BuildingPlacement:
    footprint: Rect

    def to_dict(self) -> dict:
        return {"footprint": self.footprint.to_dict()}


def place_preset_in_envelope(envelope: Envelope, preset: PresetForm) -> BuildingPlacement:
    """Center the footprint across the envelope and push it to the front yard line.

    A footprint deeper than the envelope is centered front-to-back instead,
    so the overflow is split between front and rear. Width is never
    clamped; an oversize footprint hangs past both side yards.
    """
    w = preset.footprint_width_ft
    d = preset.footprint_depth_ft

    x_center = (envelope.x0 + envelope.x1) / 2
    x0 = x_center - w / 2
    x1 = x_center + w / 2

    if d <= envelope_depth_ft(envelope):
        z0 = envelope.z0
    else:
        z0 = (envelope.z0 + envelope.z1) / 2 - d / 2
    z1 = z0 + d

    return BuildingPlacement(footprint=Rect(x0=x0, x1=x1, z0=z0, z1=z1))
