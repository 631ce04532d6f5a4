from __future__ import annotations

from lotfit.zoning_engine.evaluate import Evaluation, ViolationCode, evaluate_scenario

__all__ = ["Evaluation", "ViolationCode", "evaluate_scenario"]
