from __future__ import annotations

from lotfit.models.schemas import (
    Lot,
    LotPreset,
    LotSetbacks,
    ParkingConfig,
    PresetForm,
    Ruleset,
    RulesetSource,
    ScenarioConfig,
)

__all__ = [
    "Lot",
    "LotPreset",
    "LotSetbacks",
    "ParkingConfig",
    "PresetForm",
    "Ruleset",
    "RulesetSource",
    "ScenarioConfig",
]
