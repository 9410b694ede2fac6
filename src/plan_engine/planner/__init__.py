"""Plan synthesis: skeleton, placement, adjustments and validation."""

from plan_engine.planner.compliance import evaluate_plan_compliance, evaluate_week_compliance
from plan_engine.planner.synthesizer import PlanSynthesizer, generate_plan
from plan_engine.planner.validation import plan_violations, validate_plan

__all__ = [
    "PlanSynthesizer",
    "evaluate_plan_compliance",
    "evaluate_week_compliance",
    "generate_plan",
    "plan_violations",
    "validate_plan",
]
