"""Shared test fixtures: coach forms for each template and a fixed date."""

from __future__ import annotations

from datetime import date

import pytest

from pacelink_engine.models.enums import IntensityLevel, WorkoutTemplate
from pacelink_engine.models.form_state import PhaseInput, WorkoutForm


@pytest.fixture
def today() -> date:
    """Friday 7 March 2025."""
    return date(2025, 3, 7)


@pytest.fixture
def easy_run_form() -> WorkoutForm:
    """2 km warm-up + 5 km moderate + 1 km cool-down, P1K 4:00/km."""
    return WorkoutForm(
        template=WorkoutTemplate.EASY_RUN,
        warmup_km=2.0,
        cooldown_km=1.0,
        reference_pace_sec_per_km=240,
        main_distance_km=5.0,
        main_intensity=IntensityLevel.MODERATE,
    )


@pytest.fixture
def progressive_form() -> WorkoutForm:
    """Three phases light -> moderate -> strong, no warm-up / cool-down."""
    return WorkoutForm(
        template=WorkoutTemplate.PROGRESSIVE,
        warmup_enabled=False,
        cooldown_enabled=False,
        reference_pace_sec_per_km=300,
        phases=(
            PhaseInput(distance_km=3.0, intensity=IntensityLevel.LIGHT),
            PhaseInput(distance_km=2.0, intensity=IntensityLevel.MODERATE),
            PhaseInput(distance_km=1.0, intensity=IntensityLevel.STRONG),
        ),
    )


@pytest.fixture
def alternated_form() -> WorkoutForm:
    """3 x (0.4 km strong / 0.2 km recovery), no warm-up / cool-down."""
    return WorkoutForm(
        template=WorkoutTemplate.ALTERNATED,
        warmup_enabled=False,
        cooldown_enabled=False,
        reference_pace_sec_per_km=240,
        repeats=3,
        strong_distance_km=0.4,
        easy_distance_km=0.2,
    )
