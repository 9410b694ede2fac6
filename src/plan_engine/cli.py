"""Command-line entry point — builds a weekly plan from JSON exports.

Usage:
    python -m plan_engine.cli --records workouts.json --profile profile.json
    python -m plan_engine.cli --records workouts.json --profile profile.json \
        --days 28 --feedback feedback.json

``workouts.json`` is a list of ``{"id", "createdAt", "summary"}`` objects,
``profile.json`` holds ``preferredRunDays``, ``preferredSurface`` and
``constraints``, and ``feedback.json`` holds ``character``, ``hrStable``,
``paceEquality`` and ``weeklyLoadContribution``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from plan_engine import config
from plan_engine.context.assembler import assemble_context
from plan_engine.context.profile import StoredProfile, parse_profile_constraints
from plan_engine.engine import AdjustmentEngine
from plan_engine.exceptions import PlanEngineError
from plan_engine.feedback import map_feedback_to_signals
from plan_engine.math.calendar import parse_iso
from plan_engine.models.feedback import SessionFeedback
from plan_engine.models.workout import WorkoutRecord
from plan_engine.planner.synthesizer import PlanSynthesizer
from plan_engine.serialization.payload import to_json
from plan_engine.signals.aggregator import SignalAggregator

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _as_json_text(value: Any) -> str | None:
    """Stored profile fields are JSON text; accept already-decoded values too."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


def load_records(path: Path) -> list[WorkoutRecord]:
    """Read workout records, skipping entries without a usable ``createdAt``."""
    records = []
    for index, item in enumerate(_load_json(path)):
        try:
            created_at = parse_iso(item["createdAt"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping record #%d without a valid createdAt: %s", index, exc)
            continue
        records.append(
            WorkoutRecord(id=item.get("id", index), created_at=created_at, summary=item.get("summary"))
        )
    return records


def load_profile(path: Path) -> StoredProfile:
    raw = _load_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return StoredProfile(
        preferred_run_days=_as_json_text(raw.get("preferredRunDays")),
        preferred_surface=raw.get("preferredSurface"),
        constraints=_as_json_text(raw.get("constraints")),
    )


def load_feedback(path: Path) -> SessionFeedback:
    raw = _load_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return SessionFeedback(
        character=str(raw.get("character", "easy")),
        hr_stable=bool(raw.get("hrStable", True)),
        pace_equality=float(raw.get("paceEquality", 1.0)),
        weekly_load_contribution=float(raw.get("weeklyLoadContribution", 0.0)),
    )


def build_plan_json(
    records_path: Path,
    profile_path: Path,
    days: int,
    feedback_path: Path | None = None,
) -> str:
    """Run the whole pipeline over the given files and return the plan JSON."""
    signals = SignalAggregator().aggregate(load_records(records_path), days)
    context = assemble_context(signals, parse_profile_constraints(load_profile(profile_path)), days)

    feedback = None
    if feedback_path is not None:
        feedback = map_feedback_to_signals(load_feedback(feedback_path))

    adjustments = AdjustmentEngine().generate(context, feedback)
    plan = PlanSynthesizer().generate_plan(context, adjustments)
    return to_json(plan, indent=2)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Deterministic weekly training plan")
    parser.add_argument("--records", type=Path, required=True, help="Workout records JSON file")
    parser.add_argument("--profile", type=Path, required=True, help="Stored profile JSON file")
    parser.add_argument(
        "--days",
        type=int,
        default=config.WINDOW_DAYS,
        help=f"Aggregation window in days (default: {config.WINDOW_DAYS})",
    )
    parser.add_argument("--feedback", type=Path, help="Optional session feedback JSON file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.days <= 0:
        parser.error("--days must be positive")

    try:
        output = build_plan_json(args.records, args.profile, args.days, args.feedback)
    except (OSError, ValueError) as exc:
        logger.error("Could not read input: %s", exc)
        return 2
    except PlanEngineError as exc:
        logger.error("Plan generation failed: %s", exc)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
