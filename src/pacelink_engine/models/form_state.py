"""Coach form state — a single immutable aggregate with update helpers.

Every field change produces a new WorkoutForm, so the template expander
can treat the form as a plain value: ``expand_workout(form) -> draft``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from pacelink_engine.models.enums import (
    DEFAULT_ADDED_PHASE_KM,
    DEFAULT_COOLDOWN_KM,
    DEFAULT_EASY_LEG_KM,
    DEFAULT_MAIN_KM,
    DEFAULT_PHASE_KM,
    DEFAULT_REPEATS,
    DEFAULT_STRONG_LEG_KM,
    DEFAULT_WARMUP_KM,
    IntensityLevel,
    WorkoutTemplate,
)


@dataclass(frozen=True)
class PhaseInput:
    """Raw progressive phase as typed by the coach (not yet clamped)."""

    distance_km: float = DEFAULT_PHASE_KM
    intensity: IntensityLevel = IntensityLevel.MODERATE


@dataclass(frozen=True)
class WorkoutForm:
    """Everything the coach has entered for one workout.

    Parameters for all three templates are kept so switching the template
    back and forth does not lose values.
    """

    template: WorkoutTemplate = WorkoutTemplate.EASY_RUN
    warmup_enabled: bool = True
    warmup_km: float = DEFAULT_WARMUP_KM
    cooldown_enabled: bool = True
    cooldown_km: float = DEFAULT_COOLDOWN_KM
    reference_pace_sec_per_km: float | None = None

    # easy run
    main_distance_km: float = DEFAULT_MAIN_KM
    main_intensity: IntensityLevel = IntensityLevel.MODERATE

    # progressive
    phases: tuple[PhaseInput, ...] = field(default_factory=lambda: (PhaseInput(),))

    # alternated
    repeats: float = DEFAULT_REPEATS
    strong_distance_km: float = DEFAULT_STRONG_LEG_KM
    easy_distance_km: float = DEFAULT_EASY_LEG_KM


def update_form(form: WorkoutForm, **changes) -> WorkoutForm:
    """Return a copy of *form* with *changes* applied.

    Raises:
        TypeError: If a change names a field WorkoutForm does not have.
    """
    return dataclasses.replace(form, **changes)


def add_phase(
    form: WorkoutForm,
    distance_km: float = DEFAULT_ADDED_PHASE_KM,
    intensity: IntensityLevel = IntensityLevel.MODERATE,
) -> WorkoutForm:
    """Append a progressive phase."""
    phase = PhaseInput(distance_km=distance_km, intensity=intensity)
    return dataclasses.replace(form, phases=form.phases + (phase,))


def remove_phase(form: WorkoutForm, index: int) -> WorkoutForm:
    """Remove the phase at *index*.

    The progressive template always keeps at least one phase: removing the
    last one puts the default phase back.

    Raises:
        IndexError: If there is no phase at *index*.
    """
    phases = list(form.phases)
    del phases[index]
    if not phases:
        phases = [PhaseInput()]
    return dataclasses.replace(form, phases=tuple(phases))


def update_phase(form: WorkoutForm, index: int, **changes) -> WorkoutForm:
    """Replace fields of the phase at *index*.

    Raises:
        IndexError: If there is no phase at *index*.
    """
    phases = list(form.phases)
    phases[index] = dataclasses.replace(phases[index], **changes)
    return dataclasses.replace(form, phases=tuple(phases))
