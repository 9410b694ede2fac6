"""Mapping of post-session feedback to FeedbackSignals."""

from __future__ import annotations

from plan_engine.models.enums import (
    EconomyFlag,
    IntensityClass,
    LOAD_CONTRIBUTION_HIGH,
    LOAD_CONTRIBUTION_MEDIUM,
    LoadImpact,
    PACE_EQUALITY_GOOD,
    PACE_EQUALITY_OK,
)
from plan_engine.models.feedback import FeedbackSignals, FeedbackWarnings, SessionFeedback

# Coach session labels → intensity class. Unknown labels count as easy.
_CHARACTER_CLASS = {
    "easy": IntensityClass.EASY,
    "regeneracja": IntensityClass.EASY,
    "tempo": IntensityClass.MODERATE,
    "interwał": IntensityClass.HARD,
}


def classify_economy(pace_equality: float) -> EconomyFlag:
    if pace_equality > PACE_EQUALITY_GOOD:
        return EconomyFlag.GOOD
    if pace_equality > PACE_EQUALITY_OK:
        return EconomyFlag.OK
    return EconomyFlag.POOR


def classify_load_impact(weekly_load_contribution: float) -> LoadImpact:
    if weekly_load_contribution > LOAD_CONTRIBUTION_HIGH:
        return LoadImpact.HIGH
    if weekly_load_contribution > LOAD_CONTRIBUTION_MEDIUM:
        return LoadImpact.MEDIUM
    return LoadImpact.LOW


def map_feedback_to_signals(feedback: SessionFeedback) -> FeedbackSignals:
    """Classify a single session's feedback.

    Heart rate and economy warnings only fire on sessions labelled exactly
    "easy"; overload risk fires whenever the load impact is high.
    """
    economy = classify_economy(feedback.pace_equality)
    load_impact = classify_load_impact(feedback.weekly_load_contribution)
    is_easy = feedback.character == "easy"

    return FeedbackSignals(
        intensity_class=_CHARACTER_CLASS.get(feedback.character, IntensityClass.EASY),
        hr_stable=feedback.hr_stable,
        economy_flag=economy,
        load_impact=load_impact,
        warnings=FeedbackWarnings(
            economy_drop=economy == EconomyFlag.POOR and is_easy,
            hr_instability=not feedback.hr_stable and is_easy,
            overload_risk=load_impact == LoadImpact.HIGH,
        ),
    )
