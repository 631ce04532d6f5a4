#!/usr/bin/env python3
"""
Sweep every catalog lot x ruleset x housing form through the engine.

Prints one line per combination with the binding constraint, or a JSON
array with the full evaluations. Handy for eyeballing catalog changes.

Usage:
    python3 scripts/evaluate_catalog.py
    python3 scripts/evaluate_catalog.py --ruleset sample_proposed --json
    python3 scripts/evaluate_catalog.py --lot lot_corner_50x150 --parking-geometry
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

# Add backend to path when run from a checkout without installing
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.join(os.path.dirname(SCRIPT_DIR), "backend")
sys.path.insert(0, BACKEND_DIR)

from lotfit.zoning_engine.catalog import LOT_PRESETS, PRESET_FORMS, RULESETS  # noqa: E402
from lotfit.zoning_engine.evaluate import evaluate_scenario  # noqa: E402
from lotfit.zoning_engine.metrics import required_parking_spaces  # noqa: E402

logger = logging.getLogger("evaluate_catalog")


def _select(records, wanted: str | None):
    if wanted is None:
        return list(records)
    chosen = [r for r in records if r.id == wanted]
    if not chosen:
        raise SystemExit(f"Unknown id: {wanted}")
    return chosen


def run(args: argparse.Namespace) -> list[dict]:
    results = []
    for lot_preset in _select(LOT_PRESETS, args.lot):
        for ruleset in _select(RULESETS, args.ruleset):
            for preset in _select(PRESET_FORMS, args.preset):
                # Provide exactly what the ruleset requires unless overridden
                spaces = args.spaces
                if spaces is None:
                    spaces = required_parking_spaces(preset.units, ruleset)
                try:
                    evaluation = evaluate_scenario(
                        lot_preset.lot,
                        ruleset,
                        preset,
                        provided_parking_spaces=spaces,
                        show_parking_geometry=args.parking_geometry,
                        apply_coverage_debit=args.coverage_debit,
                    )
                except Exception as exc:
                    logger.warning(
                        "Evaluation failed for %s / %s / %s: %s",
                        lot_preset.id, ruleset.id, preset.id, exc,
                    )
                    results.append({
                        "lot": lot_preset.id,
                        "ruleset": ruleset.id,
                        "preset": preset.id,
                        "error": str(exc),
                    })
                    continue
                results.append({
                    "lot": lot_preset.id,
                    "ruleset": ruleset.id,
                    "preset": preset.id,
                    "provided_parking_spaces": spaces,
                    "evaluation": evaluation.to_dict(),
                })
    return results


def format_line(result: dict) -> str:
    head = f"{result['lot']:<20} {result['ruleset']:<16} {result['preset']:<14}"
    if "error" in result:
        return f"{head} ERROR {result['error']}"
    ev = result["evaluation"]
    codes = ",".join(v["code"] for v in ev["violations"]) or "-"
    return f"{head} {ev['binding']['kind']:<9} {codes:<40} {ev['binding']['label']}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Evaluate every catalog combination")
    parser.add_argument("--lot", help="Only this lot preset id")
    parser.add_argument("--ruleset", help="Only this ruleset id")
    parser.add_argument("--preset", help="Only this housing form id")
    parser.add_argument("--spaces", type=int, help="Provided parking spaces (default: required)")
    parser.add_argument("--parking-geometry", action="store_true", help="Lay out surface parking")
    parser.add_argument("--coverage-debit", action="store_true", help="Charge parking against coverage")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    results = run(args)

    if args.json:
        print(json.dumps(results, indent=2))
        return

    for result in results:
        print(format_line(result))

    failed = [r for r in results if "error" in r]
    print(f"\n{len(results) - len(failed)}/{len(results)} evaluated")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
