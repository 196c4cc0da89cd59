"""Pace model — seconds-per-km conversions and intensity pace windows.

Reference pace is P1K: the athlete's 1 km time-trial pace. Training paces
are P1K plus a fixed offset window per intensity (see PACE_OFFSETS_S).
"""

from __future__ import annotations

import math
import re

from pacelink_engine.exceptions import InvalidArgument
from pacelink_engine.models.enums import PACE_OFFSETS_S, IntensityLevel
from pacelink_engine.models.workout import PaceRange

_PACE_TEXT = re.compile(r"^\s*(\d{1,2}):([0-5]\d)\s*(?:/km)?\s*$")


def clamp(n: float, lo: float, hi: float) -> float:
    """Clamp *n* to ``[lo, hi]``. NaN clamps to *lo*."""
    if math.isnan(n):
        return lo
    return max(lo, min(hi, n))


def round_half_away(value: float, digits: int = 0) -> float:
    """Round half away from zero (2.25 -> 2.3, -2.25 -> -2.3 at 1 digit)."""
    scale = 10 ** digits
    scaled = abs(value) * scale
    rounded = math.floor(scaled + 0.5) / scale
    return math.copysign(rounded, value)


def format_pace(seconds: float) -> str:
    """Format seconds (per km) as ``M:SS``. e.g. 65 -> '1:05', -5 -> '0:00'.

    Raises:
        InvalidArgument: If *seconds* is NaN or infinite.
    """
    if not math.isfinite(seconds):
        raise InvalidArgument(f"pace must be finite, got {seconds!r}")
    s = max(0, int(round_half_away(seconds)))
    return f"{s // 60}:{s % 60:02d}"


def format_pace_range(pace_range: PaceRange | None) -> str:
    """Format a PaceRange as ``'M:SS – M:SS /km'``; ``'--'`` when None."""
    if pace_range is None:
        return "--"
    return (
        f"{format_pace(pace_range.min_sec_per_km)} – "
        f"{format_pace(pace_range.max_sec_per_km)} /km"
    )


def parse_pace(text: str) -> int:
    """Parse ``'M:SS'`` (optionally suffixed ``/km``) into seconds.

    Raises:
        InvalidArgument: If *text* is not a pace or is zero.
    """
    match = _PACE_TEXT.match(text or "")
    if match is None:
        raise InvalidArgument(f"not a pace (expected M:SS): {text!r}")
    seconds = int(match.group(1)) * 60 + int(match.group(2))
    if seconds <= 0:
        raise InvalidArgument("pace must be greater than zero")
    return seconds


def pace_range_from_reference(
    p1k_sec_per_km: float, intensity: IntensityLevel,
) -> PaceRange:
    """Suggested pace window for *intensity* given the P1K reference pace.

    Args:
        p1k_sec_per_km: Reference (time-trial) pace, seconds per km.
        intensity: LIGHT, MODERATE or STRONG.

    Returns:
        PaceRange with ``min <= max``.

    Raises:
        InvalidArgument: On a non-finite or non-positive reference pace, or
            for FREE / UNKNOWN intensity (those segments carry no pace).
    """
    if not math.isfinite(p1k_sec_per_km) or p1k_sec_per_km <= 0:
        raise InvalidArgument(
            f"reference pace must be a positive number, got {p1k_sec_per_km!r}"
        )
    if intensity not in PACE_OFFSETS_S:
        raise InvalidArgument(f"no pace range for intensity {intensity.name}")
    min_off, max_off = PACE_OFFSETS_S[intensity]
    return PaceRange(
        min_sec_per_km=p1k_sec_per_km + min_off,
        max_sec_per_km=p1k_sec_per_km + max_off,
    )
