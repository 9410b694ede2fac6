"""Feedback signals — compact classification of the most recent session."""

from __future__ import annotations

from dataclasses import dataclass, field

from plan_engine.models.enums import EconomyFlag, IntensityClass, LoadImpact


@dataclass(frozen=True)
class FeedbackWarnings:
    economy_drop: bool = False
    hr_instability: bool = False
    overload_risk: bool = False


@dataclass(frozen=True)
class FeedbackSignals:
    """Secondary input to the rule engine."""

    intensity_class: IntensityClass
    hr_stable: bool
    economy_flag: EconomyFlag
    load_impact: LoadImpact
    warnings: FeedbackWarnings = field(default_factory=FeedbackWarnings)


@dataclass(frozen=True)
class SessionFeedback:
    """Post-session analysis as produced by the feedback collaborator.

    ``character`` is the coach label of the session ("easy", "regeneracja",
    "tempo", "interwał"); ``pace_equality`` is in [0, 1] and
    ``weekly_load_contribution`` is a percentage.
    """

    character: str
    hr_stable: bool
    pace_equality: float
    weekly_load_contribution: float
