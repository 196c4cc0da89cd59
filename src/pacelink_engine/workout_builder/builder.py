"""Template expander — turns coach form state into an ordered block list.

Pure and synchronous: safe to call on every keystroke. All numeric inputs
are clamped to the template bounds, nothing is raised.
"""

from __future__ import annotations

import math
from datetime import date

from pacelink_engine.math.pace import clamp, pace_range_from_reference, round_half_away
from pacelink_engine.models.enums import (
    ALTERNATED_LEG_KM_BOUNDS,
    ALTERNATED_REPEAT_BOUNDS,
    COOLDOWN_KM_BOUNDS,
    MAIN_KM_BOUNDS,
    PACE_OFFSETS_S,
    WARMUP_KM_BOUNDS,
    IntensityLevel,
    SegmentKind,
    WorkoutTemplate,
)
from pacelink_engine.models.form_state import WorkoutForm
from pacelink_engine.models.workout import (
    AlternatedParams,
    EasyRunParams,
    PaceRange,
    ProgressiveParams,
    ProgressivePhase,
    TemplateParams,
    WorkoutBlock,
    WorkoutDraft,
)
from pacelink_engine.workout_builder.hints import get_hint
from pacelink_engine.workout_builder.titles import build_share_title

WARMUP_LABEL = "Aquecimento"
COOLDOWN_LABEL = "Desaquecimento"
EASY_RUN_LABEL = "Trecho principal"


class _BlockList:
    """Appends blocks while assigning consecutive order indexes."""

    def __init__(self) -> None:
        self.blocks: list[WorkoutBlock] = []

    def add(
        self,
        segment_kind: SegmentKind,
        label: str,
        distance_km: float,
        intensity: IntensityLevel,
        pace_range: PaceRange | None,
        hint_text: str | None,
    ) -> None:
        self.blocks.append(WorkoutBlock(
            order_index=len(self.blocks),
            segment_kind=segment_kind,
            label=label,
            distance_km=distance_km,
            intensity=intensity,
            pace_range=pace_range,
            hint_text=hint_text,
        ))


def expand_workout(form: WorkoutForm, today: date | None = None) -> WorkoutDraft:
    """Expand *form* into a WorkoutDraft.

    Algorithm:
    1. Warm-up block (if enabled), distance clamped to [0.1, 50] km
    2. Main blocks for the selected template
    3. Cool-down block (if enabled), distance clamped to [0.1, 50] km
    4. total_km = sum of all block distances, rounded to 0.1 km
    5. share_title = "<template name> • DD/MM" for *today*

    Args:
        form: Current coach form state.
        today: Date used in the share title. Defaults to ``date.today()``.

    Returns:
        The expanded WorkoutDraft.
    """
    if today is None:
        today = date.today()
    reference = _usable_reference(form.reference_pace_sec_per_km)
    out = _BlockList()

    # --- Warm-up ---
    if form.warmup_enabled:
        out.add(
            SegmentKind.WARMUP,
            WARMUP_LABEL,
            clamp(form.warmup_km, *WARMUP_KM_BOUNDS),
            IntensityLevel.FREE,
            None,
            get_hint(form.template, SegmentKind.WARMUP, IntensityLevel.FREE),
        )

    # --- Main set ---
    if form.template == WorkoutTemplate.EASY_RUN:
        params: TemplateParams = _expand_easy_run(form, reference, out)
    elif form.template == WorkoutTemplate.PROGRESSIVE:
        params = _expand_progressive(form, reference, out)
    else:
        params = _expand_alternated(form, reference, out)

    # --- Cool-down ---
    if form.cooldown_enabled:
        out.add(
            SegmentKind.COOLDOWN,
            COOLDOWN_LABEL,
            clamp(form.cooldown_km, *COOLDOWN_KM_BOUNDS),
            IntensityLevel.FREE,
            None,
            get_hint(form.template, SegmentKind.COOLDOWN, IntensityLevel.FREE),
        )

    total_km = sum(b.distance_km for b in out.blocks)
    return WorkoutDraft(
        blocks=tuple(out.blocks),
        total_km=round_half_away(total_km, 1),
        template_type=form.template,
        template_params=params,
        share_title=build_share_title(form.template, today),
    )


def _expand_easy_run(
    form: WorkoutForm, reference: float | None, out: _BlockList,
) -> EasyRunParams:
    """Single steady main block."""
    distance = clamp(form.main_distance_km, *MAIN_KM_BOUNDS)
    out.add(
        SegmentKind.MAIN,
        EASY_RUN_LABEL,
        distance,
        form.main_intensity,
        _pace_for(reference, form.main_intensity),
        get_hint(WorkoutTemplate.EASY_RUN, SegmentKind.MAIN, form.main_intensity),
    )
    return EasyRunParams(main_distance_km=distance, intensity=form.main_intensity)


def _expand_progressive(
    form: WorkoutForm, reference: float | None, out: _BlockList,
) -> ProgressiveParams:
    """One main block per phase, in phase order."""
    phases: list[ProgressivePhase] = []
    for order, phase in enumerate(form.phases, start=1):
        distance = clamp(phase.distance_km, *MAIN_KM_BOUNDS)
        phases.append(ProgressivePhase(
            order=order, distance_km=distance, intensity=phase.intensity,
        ))
        out.add(
            SegmentKind.MAIN,
            f"Bloco {order}",
            distance,
            phase.intensity,
            _pace_for(reference, phase.intensity),
            get_hint(WorkoutTemplate.PROGRESSIVE, SegmentKind.MAIN, phase.intensity),
        )
    return ProgressiveParams(phases=tuple(phases))


def _expand_alternated(
    form: WorkoutForm, reference: float | None, out: _BlockList,
) -> AlternatedParams:
    """``repeats`` pairs of (strong leg, unpaced light recovery leg)."""
    repeats = int(clamp(form.repeats, *ALTERNATED_REPEAT_BOUNDS))
    strong_km = clamp(form.strong_distance_km, *ALTERNATED_LEG_KM_BOUNDS)
    easy_km = clamp(form.easy_distance_km, *ALTERNATED_LEG_KM_BOUNDS)
    strong_pace = _pace_for(reference, IntensityLevel.STRONG)
    strong_hint = get_hint(
        WorkoutTemplate.ALTERNATED, SegmentKind.MAIN, IntensityLevel.STRONG,
    )
    easy_hint = get_hint(
        WorkoutTemplate.ALTERNATED, SegmentKind.MAIN, IntensityLevel.LIGHT,
    )

    for i in range(1, repeats + 1):
        out.add(
            SegmentKind.MAIN, f"Tiro {i}", strong_km,
            IntensityLevel.STRONG, strong_pace, strong_hint,
        )
        # Recovery legs are never paced
        out.add(
            SegmentKind.MAIN, f"Recuperação {i}", easy_km,
            IntensityLevel.LIGHT, None, easy_hint,
        )

    return AlternatedParams(
        repeats=repeats, strong_distance_km=strong_km, easy_distance_km=easy_km,
    )


def _usable_reference(reference: float | None) -> float | None:
    """A reference pace that is missing, non-finite or non-positive is ignored."""
    if reference is None or not math.isfinite(reference) or reference <= 0:
        return None
    return reference


def _pace_for(reference: float | None, intensity: IntensityLevel) -> PaceRange | None:
    if reference is None or intensity not in PACE_OFFSETS_S:
        return None
    return pace_range_from_reference(reference, intensity)
