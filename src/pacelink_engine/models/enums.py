"""Enumerations and fixed constants for the workout engine.

Stored database values are Portuguese keys ("leve", "rodagem", ...); the
enums below are the canonical in-process representation and the mapping
tables translate at the edges.
"""

from enum import IntEnum, auto


class IntensityLevel(IntEnum):
    """Effort level of a workout segment.

    FREE means "no pace guidance" (warm-up / cool-down). UNKNOWN is the
    fallback for stored values that match no known key.
    """

    LIGHT = auto()
    MODERATE = auto()
    STRONG = auto()
    FREE = auto()
    UNKNOWN = auto()


class SegmentKind(IntEnum):
    """Position of a block inside the workout."""

    WARMUP = auto()
    MAIN = auto()
    COOLDOWN = auto()


class WorkoutTemplate(IntEnum):
    """High-level workout shape chosen by the coach."""

    EASY_RUN = auto()
    PROGRESSIVE = auto()
    ALTERNATED = auto()


class SaveIntent(IntEnum):
    """What the coach asked for when persisting a draft."""

    DRAFT = auto()
    READY = auto()


class ExecutionStatus(IntEnum):
    """Lifecycle of a student's execution of a shared workout."""

    RUNNING = auto()
    PAUSED = auto()
    COMPLETED = auto()


# ---------------------------------------------------------------------------
# Stored keys
# ---------------------------------------------------------------------------

INTENSITY_KEYS: dict[IntensityLevel, str] = {
    IntensityLevel.LIGHT: "leve",
    IntensityLevel.MODERATE: "moderado",
    IntensityLevel.STRONG: "forte",
    IntensityLevel.FREE: "livre",
    IntensityLevel.UNKNOWN: "desconhecido",
}

INTENSITY_LABELS: dict[IntensityLevel, str] = {
    IntensityLevel.LIGHT: "Leve",
    IntensityLevel.MODERATE: "Moderado",
    IntensityLevel.STRONG: "Forte",
    IntensityLevel.FREE: "Livre",
    IntensityLevel.UNKNOWN: "—",
}

SEGMENT_KEYS: dict[SegmentKind, str] = {
    SegmentKind.WARMUP: "warmup",
    SegmentKind.MAIN: "main",
    SegmentKind.COOLDOWN: "cooldown",
}

# Canonical template_type column values
TEMPLATE_KEYS: dict[WorkoutTemplate, str] = {
    WorkoutTemplate.EASY_RUN: "easy_run",
    WorkoutTemplate.PROGRESSIVE: "progressive",
    WorkoutTemplate.ALTERNATED: "alternated",
}

# Coach-facing (UI) terms
TEMPLATE_UI_KEYS: dict[WorkoutTemplate, str] = {
    WorkoutTemplate.EASY_RUN: "rodagem",
    WorkoutTemplate.PROGRESSIVE: "progressivo",
    WorkoutTemplate.ALTERNATED: "alternado",
}

TEMPLATE_DISPLAY_NAMES: dict[WorkoutTemplate, str] = {
    WorkoutTemplate.EASY_RUN: "Rodagem",
    WorkoutTemplate.PROGRESSIVE: "Progressivo",
    WorkoutTemplate.ALTERNATED: "Alternado",
}

EXECUTION_STATUS_KEYS: dict[ExecutionStatus, str] = {
    ExecutionStatus.RUNNING: "running",
    ExecutionStatus.PAUSED: "paused",
    ExecutionStatus.COMPLETED: "completed",
}

# ---------------------------------------------------------------------------
# Pace offsets relative to the P1K reference pace (seconds per km)
# ---------------------------------------------------------------------------

PACE_OFFSETS_S: dict[IntensityLevel, tuple[int, int]] = {
    IntensityLevel.LIGHT: (90, 150),
    IntensityLevel.MODERATE: (45, 90),
    IntensityLevel.STRONG: (15, 45),
}

# ---------------------------------------------------------------------------
# Clamp bounds (km / count)
# ---------------------------------------------------------------------------

WARMUP_KM_BOUNDS = (0.1, 50.0)
COOLDOWN_KM_BOUNDS = (0.1, 50.0)
MAIN_KM_BOUNDS = (0.1, 200.0)
ALTERNATED_LEG_KM_BOUNDS = (0.05, 10.0)
ALTERNATED_REPEAT_BOUNDS = (1, 60)

# ---------------------------------------------------------------------------
# Form defaults
# ---------------------------------------------------------------------------

DEFAULT_WARMUP_KM = 2.0
DEFAULT_COOLDOWN_KM = 1.0
DEFAULT_MAIN_KM = 5.0
DEFAULT_PHASE_KM = 5.0
DEFAULT_ADDED_PHASE_KM = 1.0
DEFAULT_REPEATS = 6
DEFAULT_STRONG_LEG_KM = 0.2
DEFAULT_EASY_LEG_KM = 0.2

# Weeks kept ahead of today for every student
DEFAULT_WEEKS_AHEAD = 8

# RPE scale bounds
RPE_MIN = 1
RPE_MAX = 10

# Calendar zone used for "today" when bucketing weeks
DEFAULT_TIMEZONE = "America/Sao_Paulo"

# Weeks shown in the training summary report
DEFAULT_SUMMARY_WEEKS = 4
