"""Backend payload serialization for expanded workouts.

Converts a WorkoutDraft (plus the form toggles it came from) into the
row dict written to the ``workouts`` table. ``status`` and
``template_type`` are left out: the persistence layer fills them per
attempt.

All functions are pure (no I/O, no network calls).
"""

from __future__ import annotations

from pacelink_engine.models.enums import (
    INTENSITY_KEYS,
    SEGMENT_KEYS,
    SegmentKind,
)
from pacelink_engine.models.form_state import WorkoutForm
from pacelink_engine.models.workout import (
    AlternatedParams,
    EasyRunParams,
    ProgressiveParams,
    TemplateParams,
    WorkoutBlock,
    WorkoutDraft,
)

PAYLOAD_VERSION = 1


def to_workout_payload(
    draft: WorkoutDraft,
    form: WorkoutForm,
    trainer_id: str,
    student_id: str,
    share_slug: str | None = None,
) -> dict:
    """Build the ``workouts`` row for *draft*."""
    return {
        "trainer_id": trainer_id,
        "student_id": student_id,
        "include_warmup": form.warmup_enabled,
        "warmup_km": _block_distance(draft, SegmentKind.WARMUP) if form.warmup_enabled else None,
        "include_cooldown": form.cooldown_enabled,
        "cooldown_km": _block_distance(draft, SegmentKind.COOLDOWN) if form.cooldown_enabled else None,
        "template_params": template_params_to_dict(draft.template_params),
        "blocks": [block_to_dict(b) for b in draft.blocks],
        "total_km": draft.total_km,
        "title": draft.share_title,
        "share_slug": share_slug,
        "version": PAYLOAD_VERSION,
    }


def block_to_dict(block: WorkoutBlock) -> dict:
    """Serialize one block with stored keys and nullable pace bounds."""
    pace = block.pace_range
    return {
        "index": block.order_index,
        "label": block.label,
        "segment_type": SEGMENT_KEYS[block.segment_kind],
        "distance_km": block.distance_km,
        "intensity": INTENSITY_KEYS[block.intensity],
        "pace_min_sec_per_km": pace.min_sec_per_km if pace is not None else None,
        "pace_max_sec_per_km": pace.max_sec_per_km if pace is not None else None,
        "hint_text": block.hint_text,
    }


def template_params_to_dict(params: TemplateParams) -> dict:
    """Serialize template parameters to the JSON shape stored per template."""
    if isinstance(params, EasyRunParams):
        return {
            "main_distance_km": params.main_distance_km,
            "intensity": INTENSITY_KEYS[params.intensity],
        }
    if isinstance(params, ProgressiveParams):
        return {
            "phases": [
                {
                    "order": p.order,
                    "distance_km": p.distance_km,
                    "intensity": INTENSITY_KEYS[p.intensity],
                }
                for p in params.phases
            ],
        }
    if isinstance(params, AlternatedParams):
        return {
            "repeats": params.repeats,
            "strong_distance_km": params.strong_distance_km,
            "easy_distance_km": params.easy_distance_km,
        }
    raise TypeError(f"Unknown template params: {type(params).__name__}")


def _block_distance(draft: WorkoutDraft, kind: SegmentKind) -> float | None:
    for block in draft.blocks:
        if block.segment_kind == kind:
            return block.distance_km
    return None
