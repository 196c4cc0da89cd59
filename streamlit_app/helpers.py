"""Utility helpers bridging the Streamlit UI and the workout engine.

Pure functions for formatting, widget option tables and form construction.
"""

from __future__ import annotations

from pacelink_engine.math.pace import InvalidArgument, format_pace_range, parse_pace
from pacelink_engine.models.enums import (
    INTENSITY_LABELS,
    TEMPLATE_DISPLAY_NAMES,
    IntensityLevel,
    SegmentKind,
    WorkoutTemplate,
)
from pacelink_engine.models.workout import WorkoutBlock

from pacelink_client.config import PUBLIC_BASE_URL

# ---------------------------------------------------------------------------
# Widget options
# ---------------------------------------------------------------------------

TEMPLATE_OPTIONS: tuple[WorkoutTemplate, ...] = (
    WorkoutTemplate.EASY_RUN,
    WorkoutTemplate.PROGRESSIVE,
    WorkoutTemplate.ALTERNATED,
)

# Easy runs are prescribed light or moderate
EASY_RUN_INTENSITIES: tuple[IntensityLevel, ...] = (
    IntensityLevel.LIGHT,
    IntensityLevel.MODERATE,
)

PHASE_INTENSITIES: tuple[IntensityLevel, ...] = (
    IntensityLevel.LIGHT,
    IntensityLevel.MODERATE,
    IntensityLevel.STRONG,
)


def template_label(template: WorkoutTemplate) -> str:
    return TEMPLATE_DISPLAY_NAMES[template]


def intensity_label(level: IntensityLevel) -> str:
    return INTENSITY_LABELS[level]


# ---------------------------------------------------------------------------
# Color maps
# ---------------------------------------------------------------------------

SEGMENT_COLORS: dict[SegmentKind, str] = {
    SegmentKind.WARMUP: "#FF8C00",     # orange
    SegmentKind.MAIN: "#2ECC71",       # green
    SegmentKind.COOLDOWN: "#4A90D9",   # blue
}

INTENSITY_COLORS: dict[IntensityLevel, str] = {
    IntensityLevel.LIGHT: "#AED6F1",
    IntensityLevel.MODERATE: "#F5B041",
    IntensityLevel.STRONG: "#E74C3C",
    IntensityLevel.FREE: "#D5DBDB",
    IntensityLevel.UNKNOWN: "#D5DBDB",
}


def block_color(block: WorkoutBlock) -> str:
    """Main blocks are colored by intensity, warm-up / cool-down by segment."""
    if block.segment_kind == SegmentKind.MAIN:
        return INTENSITY_COLORS.get(block.intensity, "#CCCCCC")
    return SEGMENT_COLORS.get(block.segment_kind, "#CCCCCC")


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_km(km: float) -> str:
    """e.g. 0.2 -> '0.2 km', 8.0 -> '8 km'."""
    return f"{km:g} km"


def describe_block(block: WorkoutBlock) -> str:
    """One-line summary: ``'Tiro 1 | 0.2 km | Forte | 4:15 – 4:45 /km'``."""
    parts = [block.label, format_km(block.distance_km), intensity_label(block.intensity)]
    pace = format_pace_range(block.pace_range)
    if pace != "--":
        parts.append(pace)
    return " | ".join(parts)


def parse_reference_pace(text: str) -> tuple[float | None, str | None]:
    """Parse the P1K text field.

    Returns ``(seconds, None)`` on success, ``(None, None)`` for an empty
    field and ``(None, message)`` when the text is not a pace.
    """
    if not text or not text.strip():
        return None, None
    try:
        return float(parse_pace(text)), None
    except InvalidArgument:
        return None, "Pace inválido. Use o formato M:SS (ex.: 4:30)."


def share_url(share_slug: str) -> str:
    return f"{PUBLIC_BASE_URL.rstrip('/')}/{share_slug}"


def saved_workout_key(student_id: str, week_id: str | None) -> str:
    """Session key for the workout being edited; one per student and week."""
    return f"{student_id}:{week_id or '-'}"
