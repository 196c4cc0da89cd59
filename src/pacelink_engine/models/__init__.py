"""Data models for the workout engine."""

from pacelink_engine.models.enums import (
    ExecutionStatus,
    IntensityLevel,
    SaveIntent,
    SegmentKind,
    WorkoutTemplate,
)
from pacelink_engine.models.execution import ExecutionReport
from pacelink_engine.models.form_state import (
    PhaseInput,
    WorkoutForm,
    add_phase,
    remove_phase,
    update_form,
    update_phase,
)
from pacelink_engine.models.intensity import normalize_intensity
from pacelink_engine.models.workout import (
    AlternatedParams,
    EasyRunParams,
    PaceRange,
    ProgressiveParams,
    ProgressivePhase,
    WorkoutBlock,
    WorkoutDraft,
)

__all__ = [
    "AlternatedParams",
    "EasyRunParams",
    "ExecutionReport",
    "ExecutionStatus",
    "IntensityLevel",
    "PaceRange",
    "PhaseInput",
    "ProgressiveParams",
    "ProgressivePhase",
    "SaveIntent",
    "SegmentKind",
    "WorkoutBlock",
    "WorkoutDraft",
    "WorkoutForm",
    "WorkoutTemplate",
    "add_phase",
    "normalize_intensity",
    "remove_phase",
    "update_form",
    "update_phase",
]
