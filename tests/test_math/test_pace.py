"""Tests for the pace model: clamping, rounding, formatting, P1K windows."""

from __future__ import annotations

import math

import pytest

from pacelink_engine.math.pace import (
    InvalidArgument,
    clamp,
    format_pace,
    format_pace_range,
    pace_range_from_reference,
    parse_pace,
    round_half_away,
)
from pacelink_engine.models.enums import IntensityLevel
from pacelink_engine.models.workout import PaceRange


class TestClamp:
    def test_nan_clamps_to_lower_bound(self) -> None:
        assert clamp(math.nan, 0.1, 50) == 0.1

    def test_infinities_clamp_to_bounds(self) -> None:
        assert clamp(math.inf, 0.1, 50) == 50
        assert clamp(-math.inf, 0.1, 50) == 0.1

    def test_value_inside_range_unchanged(self) -> None:
        assert clamp(5.0, 0.1, 200) == 5.0

    @pytest.mark.parametrize("n", [-10.0, 0.0, 0.05, 3.3, 199.9, 250.0, math.nan, math.inf])
    def test_idempotent_and_in_range(self, n: float) -> None:
        once = clamp(n, 0.1, 200)
        assert clamp(once, 0.1, 200) == once
        assert 0.1 <= once <= 200


class TestRoundHalfAway:
    def test_rounds_half_up(self) -> None:
        assert round_half_away(2.25, 1) == 2.3

    def test_rounds_negative_half_away_from_zero(self) -> None:
        assert round_half_away(-2.25, 1) == -2.3

    def test_integer_rounding(self) -> None:
        assert round_half_away(59.5) == 60
        assert round_half_away(59.4) == 59

    def test_float_noise_is_absorbed(self) -> None:
        assert round_half_away(0.4 + 0.2 + 0.4 + 0.2 + 0.4 + 0.2, 1) == 1.8


class TestFormatPace:
    def test_pads_seconds(self) -> None:
        assert format_pace(65) == "1:05"

    def test_rounds_to_nearest_second(self) -> None:
        assert format_pace(59.5) == "1:00"

    def test_negative_floors_at_zero(self) -> None:
        assert format_pace(-5) == "0:00"

    def test_non_finite_raises(self) -> None:
        with pytest.raises(InvalidArgument):
            format_pace(math.nan)
        with pytest.raises(InvalidArgument):
            format_pace(math.inf)

    def test_range_format(self) -> None:
        assert format_pace_range(PaceRange(285, 330)) == "4:45 – 5:30 /km"

    def test_missing_range_is_dashes(self) -> None:
        assert format_pace_range(None) == "--"


class TestParsePace:
    def test_parses_minutes_seconds(self) -> None:
        assert parse_pace("4:30") == 270

    def test_accepts_per_km_suffix_and_spaces(self) -> None:
        assert parse_pace(" 4:05 /km ") == 245

    @pytest.mark.parametrize("text", ["", "4:3", "abc", "4:75", "0:00", "4.30"])
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(InvalidArgument):
            parse_pace(text)


class TestPaceRangeFromReference:
    def test_light_window(self) -> None:
        assert pace_range_from_reference(240, IntensityLevel.LIGHT) == PaceRange(330, 390)

    def test_moderate_window(self) -> None:
        assert pace_range_from_reference(240, IntensityLevel.MODERATE) == PaceRange(285, 330)

    def test_strong_window(self) -> None:
        assert pace_range_from_reference(240, IntensityLevel.STRONG) == PaceRange(255, 285)

    @pytest.mark.parametrize("p1k", [180, 240, 301.5, 420])
    def test_windows_are_ordered_and_slower_than_reference(self, p1k: float) -> None:
        for level in (IntensityLevel.LIGHT, IntensityLevel.MODERATE, IntensityLevel.STRONG):
            rng = pace_range_from_reference(p1k, level)
            assert p1k < rng.min_sec_per_km <= rng.max_sec_per_km

    def test_lighter_is_slower(self) -> None:
        light = pace_range_from_reference(240, IntensityLevel.LIGHT)
        moderate = pace_range_from_reference(240, IntensityLevel.MODERATE)
        strong = pace_range_from_reference(240, IntensityLevel.STRONG)
        assert light.min_sec_per_km >= moderate.min_sec_per_km >= strong.min_sec_per_km

    @pytest.mark.parametrize("p1k", [0, -30, math.nan, math.inf])
    def test_invalid_reference_raises(self, p1k: float) -> None:
        with pytest.raises(InvalidArgument):
            pace_range_from_reference(p1k, IntensityLevel.MODERATE)

    def test_free_intensity_has_no_window(self) -> None:
        with pytest.raises(InvalidArgument):
            pace_range_from_reference(240, IntensityLevel.FREE)
