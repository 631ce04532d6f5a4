from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


StreetSide = Literal["left", "right"]

PresetKind = Literal[
    "baseline_sfh",
    "stacked_flats",
    "townhouse",
    "courtyard",
    "adu",
    "mixed_use",
]


class _Record(BaseModel):
    """Immutable input record; equality is field-wise."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class LotSetbacks(_Record):
    front: float = Field(ge=0)
    rear: float = Field(ge=0)
    side_left: float = Field(ge=0)
    side_right: float = Field(ge=0)
    street_side: Optional[float] = Field(default=None, ge=0)  # corner lots only


class Lot(_Record):
    width_ft: float = Field(ge=0)
    depth_ft: float = Field(ge=0)
    is_corner: bool = False
    street_side: StreetSide = "right"
    setbacks_ft: LotSetbacks


class RulesetSource(_Record):
    title: str
    url: str
    last_updated: str


class Ruleset(_Record):
    id: str
    name: str
    version_label: str
    notes: Optional[str] = None
    sources: tuple[RulesetSource, ...] = ()

    max_height_ft: float = Field(ge=0)
    max_far: float = Field(ge=0)
    max_lot_coverage_pct: float = Field(ge=0, le=1)  # fraction, 0.4 == 40%

    min_lot_width_ft: Optional[float] = Field(default=None, ge=0)
    min_lot_area_sq_ft: Optional[float] = Field(default=None, ge=0)

    parking_min_spaces_per_unit: Optional[float] = Field(default=None, ge=0)
    parking_coverage_debit_sq_ft_per_required_space: Optional[float] = Field(default=None, ge=0)


class PresetForm(_Record):
    id: str
    name: str
    description: str = ""
    kind: PresetKind

    units: int = Field(gt=0)
    stories: int = Field(gt=0)
    floor_to_floor_ft: float = Field(gt=0)

    footprint_width_ft: float = Field(gt=0)
    footprint_depth_ft: float = Field(gt=0)


class LotPreset(_Record):
    id: str
    name: str
    lot: Lot


class ParkingConfig(_Record):
    provided_spaces: int = Field(default=0, ge=0)
    show_geometry: bool = False
    apply_coverage_debit: bool = False


class ScenarioConfig(_Record):
    """What a caller sends: a concrete lot plus catalog references."""
    lot: Lot
    ruleset_id: str
    preset_id: str
    parking: ParkingConfig = ParkingConfig()


class CompareRequest(BaseModel):
    scenario_a: ScenarioConfig
    scenario_b: ScenarioConfig
