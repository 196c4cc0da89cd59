"""Tests for block hint lookup and fallbacks."""

from __future__ import annotations

from pacelink_engine.models.enums import IntensityLevel, SegmentKind, WorkoutTemplate
from pacelink_engine.workout_builder.hints import get_hint


class TestHints:
    def test_warmup_hint_is_generic(self) -> None:
        hints = {
            get_hint(t, SegmentKind.WARMUP, IntensityLevel.FREE) for t in WorkoutTemplate
        }
        assert hints == {"Ritmo confortável para preparar o corpo."}

    def test_cooldown_hint_is_generic(self) -> None:
        hint = get_hint(WorkoutTemplate.ALTERNATED, SegmentKind.COOLDOWN, IntensityLevel.FREE)
        assert hint == "Reduza o ritmo gradualmente para recuperar."

    def test_easy_run_light_vs_moderate_differ(self) -> None:
        light = get_hint(WorkoutTemplate.EASY_RUN, SegmentKind.MAIN, IntensityLevel.LIGHT)
        moderate = get_hint(WorkoutTemplate.EASY_RUN, SegmentKind.MAIN, IntensityLevel.MODERATE)
        assert light != moderate

    def test_progressive_unknown_falls_back_to_strong_hint(self) -> None:
        hint = get_hint(WorkoutTemplate.PROGRESSIVE, SegmentKind.MAIN, IntensityLevel.UNKNOWN)
        assert hint == "Feche forte sem perder a técnica."

    def test_alternated_recovery_hint(self) -> None:
        hint = get_hint(WorkoutTemplate.ALTERNATED, SegmentKind.MAIN, IntensityLevel.LIGHT)
        assert hint == "Solte e recupere. Respiração e técnica."
