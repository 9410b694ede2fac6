"""Enumerations and fixed constants for the plan engine.

Every numeric constant that shapes an output lives here so the behaviour of
the pipeline is documented in one place.
"""

from enum import Enum


class TrainingDay(str, Enum):
    """Calendar day of an ISO week, Monday first."""

    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"


# Monday..Sunday, matching ``datetime.weekday()`` indices.
DAYS_ORDER: tuple[TrainingDay, ...] = tuple(TrainingDay)
WEEKDAYS = frozenset(DAYS_ORDER[:5])
WEEKEND = frozenset(DAYS_ORDER[5:])


class SessionType(str, Enum):
    """Planned session types."""

    REST = "rest"
    EASY = "easy"
    LONG = "long"
    QUALITY = "quality"
    STRIDES = "strides"


class IntensityHint(str, Enum):
    """Heart rate zone hint attached to a planned session."""

    Z1 = "Z1"
    Z2 = "Z2"
    Z3 = "Z3"
    Z4 = "Z4"


class SurfaceHint(str, Enum):
    TRACK = "track"
    TRAIL = "trail"
    MIXED = "mixed"


class AdjustmentCode(str, Enum):
    """Closed set of adjustment instructions a rule may emit."""

    REDUCE_LOAD = "reduce_load"
    INCREASE_LOAD = "increase_load"
    ADD_LONG_RUN = "add_long_run"
    REDUCE_INTENSITY = "reduce_intensity"
    INCREASE_INTENSITY = "increase_intensity"
    ADD_REST_DAY = "add_rest_day"
    SWAP_QUALITY_DAY = "swap_quality_day"
    SURFACE_CONSTRAINT = "surface_constraint"
    SHOE_CONSTRAINT = "shoe_constraint"
    RECOVERY_FOCUS = "recovery_focus"
    TECHNIQUE_FOCUS = "technique_focus"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IntensityClass(str, Enum):
    """Classification of the most recent session's character."""

    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"


class EconomyFlag(str, Enum):
    GOOD = "good"
    OK = "ok"
    POOR = "poor"


class LoadImpact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ComplianceStatus(str, Enum):
    """How closely an executed day followed its planned session."""

    OK = "OK"
    MINOR_DEVIATION = "MINOR_DEVIATION"
    MAJOR_DEVIATION = "MAJOR_DEVIATION"


class CacheNamespace(str, Enum):
    """Namespaces of the day-scoped cache."""

    PLAN = "plan"
    INSIGHTS = "insights"
    FEEDBACK = "feedback"


# ---------------------------------------------------------------------------
# Signal aggregation
# ---------------------------------------------------------------------------
DEFAULT_WINDOW_DAYS = 28
HISTORY_LIMIT = 500  # Newest records considered per request

# Trailing window for weeklyLoad, relative to the window anchor
WEEKLY_LOAD_DAYS = 7

# sessionsPerWeek divides by a fixed four-week window
SESSIONS_PER_WEEK_DIVISOR = 4

# Upper bound of the ISO-week streak walk
MAX_STREAK_WEEKS = 104

# Output precision (decimal places)
KM_PRECISION = 2
MINUTES_PRECISION = 2
SECONDS_PRECISION = 0
LOAD_PRECISION = 0
RATE_PRECISION = 2

# ACWR thresholds used to raise the signal flags (Gabbett, 2016)
ACWR_INJURY_RISK_THRESHOLD = 1.5
ACWR_FATIGUE_THRESHOLD = 1.3

# Acute block of the ACWR; the chronic block is the rest of the window
ACWR_ACUTE_DAYS = 7

# Loaded days the chronic block needs before the ratio is meaningful
ACWR_MIN_CHRONIC_DAYS = 3

# ---------------------------------------------------------------------------
# Profile defaults
# ---------------------------------------------------------------------------
DEFAULT_TIMEZONE = "Europe/Warsaw"

# ---------------------------------------------------------------------------
# Feedback classification thresholds
# ---------------------------------------------------------------------------
PACE_EQUALITY_GOOD = 0.8
PACE_EQUALITY_OK = 0.6
LOAD_CONTRIBUTION_HIGH = 50
LOAD_CONTRIBUTION_MEDIUM = 25

# ---------------------------------------------------------------------------
# Adjustment parameters
# ---------------------------------------------------------------------------
FEEDBACK_REDUCTION_PCT = 25
DEFAULT_REDUCTION_PCT = 20
RECOVERY_LONG_RUN_REDUCTION_PCT = 15
TECHNIQUE_STRIDES_COUNT = 6
TECHNIQUE_STRIDES_DURATION_SEC = 20
MAX_TECHNIQUE_STRIDES_SESSIONS = 2

# ---------------------------------------------------------------------------
# Plan synthesis (minutes)
# ---------------------------------------------------------------------------
LONG_RUN_DURATION_MIN = 90
LONG_RUN_FATIGUED_DURATION_MIN = 75
QUALITY_DURATION_MIN = 50
DEMOTED_QUALITY_DURATION_MIN = 40
DEFAULT_EASY_DURATION_MIN = 40
FATIGUED_EASY_DURATION_CAP_MIN = 35
MIN_EASY_DURATION_MIN = 30
MAX_EASY_DURATION_MIN = 60
DURATION_ROUNDING_MIN = 5

# Quality requires at least this many sessions in the window
QUALITY_MIN_SESSIONS = 3
# Strides note requires at least this many running days
STRIDES_MIN_RUNNING_DAYS = 3
BASE_STRIDES_NOTE = "Include 4-6 strides (20-30s each)"

INPUTS_HASH_LENGTH = 64

# ---------------------------------------------------------------------------
# Plan compliance (actual / planned ratio bands)
# ---------------------------------------------------------------------------
COMPLIANCE_MAJOR_UNDER_RATIO = 0.7
COMPLIANCE_MINOR_UNDER_RATIO = 0.85
COMPLIANCE_MINOR_OVER_RATIO = 1.15
COMPLIANCE_MAJOR_OVER_RATIO = 1.3

# ---------------------------------------------------------------------------
# Resource managers
# ---------------------------------------------------------------------------
QUOTA_CLEANUP_EVERY = 200
QUOTA_RETENTION_DAYS = 3
