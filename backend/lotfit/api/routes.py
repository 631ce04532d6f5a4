from __future__ import annotations

from fastapi import APIRouter, Query

from lotfit.models.schemas import CompareRequest, Lot, ScenarioConfig
from lotfit.services.site_plan import build_site_plan
from lotfit.zoning_engine.catalog import (
    LOT_PRESETS,
    PRESET_FORMS,
    RULESETS,
    default_scenarios,
    match_lot_preset,
    normalize_scenario,
    resolve_scenario,
)
from lotfit.zoning_engine.evaluate import evaluate_scenario

router = APIRouter(prefix="/api")


def _evaluate_config(config: ScenarioConfig, include_site_plan: bool) -> dict:
    """Resolve catalog ids, evaluate, and shape the response body."""
    normalized = normalize_scenario(config)
    resolved = resolve_scenario(normalized)
    evaluation = evaluate_scenario(
        resolved.lot,
        resolved.ruleset,
        resolved.preset,
        provided_parking_spaces=resolved.parking.provided_spaces,
        show_parking_geometry=resolved.parking.show_geometry,
        apply_coverage_debit=resolved.parking.apply_coverage_debit,
    )
    body = {
        "scenario": normalized.model_dump(),
        "lot_preset_id": match_lot_preset(resolved.lot),
        "evaluation": evaluation.to_dict(),
    }
    if include_site_plan:
        body["site_plan"] = build_site_plan(resolved.lot, evaluation)
    return body


# ──────────────────────────────────────────────────────────────────
# CATALOGS
# ──────────────────────────────────────────────────────────────────

@router.get("/catalog/lots")
async def list_lot_presets():
    """Catalog lots, in display order."""
    return [p.model_dump() for p in LOT_PRESETS]


@router.get("/catalog/rulesets")
async def list_rulesets():
    return [r.model_dump() for r in RULESETS]


@router.get("/catalog/presets")
async def list_preset_forms():
    return [p.model_dump() for p in PRESET_FORMS]


# ──────────────────────────────────────────────────────────────────
# EVALUATION
# ──────────────────────────────────────────────────────────────────

@router.get("/v1/defaults")
async def get_defaults():
    """Starting A/B scenarios for a new compare session."""
    scenario_a, scenario_b = default_scenarios()
    return {"scenario_a": scenario_a.model_dump(), "scenario_b": scenario_b.model_dump()}


@router.post("/v1/lots/match")
async def match_lot(lot: Lot):
    """Which catalog lot, if any, this lot is identical to."""
    return {"lot_preset_id": match_lot_preset(lot)}


@router.post("/v1/evaluate")
async def evaluate(
    config: ScenarioConfig,
    include_site_plan: bool = Query(False, description="Attach a GeoJSON site plan"),
):
    """Evaluate one scenario.

    Unknown ruleset or preset ids fall back to the defaults; the ids
    actually used are echoed in `scenario`.
    """
    return _evaluate_config(config, include_site_plan)


@router.post("/v1/compare")
async def compare(
    request: CompareRequest,
    include_site_plan: bool = Query(False, description="Attach GeoJSON site plans"),
):
    """Evaluate two scenarios side by side."""
    return {
        "scenario_a": _evaluate_config(request.scenario_a, include_site_plan),
        "scenario_b": _evaluate_config(request.scenario_b, include_site_plan),
    }
