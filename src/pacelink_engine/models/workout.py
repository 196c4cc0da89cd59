"""Workout value types — blocks, template parameters and the expanded draft."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pacelink_engine.models.enums import IntensityLevel, SegmentKind, WorkoutTemplate


@dataclass(frozen=True)
class PaceRange:
    """Suggested pace window in seconds per km (min = faster bound)."""

    min_sec_per_km: float
    max_sec_per_km: float


@dataclass(frozen=True)
class WorkoutBlock:
    """One concrete segment of an expanded workout.

    ``order_index`` is the 0-based position in the workout, warm-up first.
    ``distance_km`` is already clamped to the template's bounds.
    """

    order_index: int
    segment_kind: SegmentKind
    label: str
    distance_km: float
    intensity: IntensityLevel
    pace_range: PaceRange | None = None
    hint_text: str | None = None


@dataclass(frozen=True)
class EasyRunParams:
    main_distance_km: float
    intensity: IntensityLevel


@dataclass(frozen=True)
class ProgressivePhase:
    """A single progressive phase; ``order`` is 1-based."""

    order: int
    distance_km: float
    intensity: IntensityLevel


@dataclass(frozen=True)
class ProgressiveParams:
    phases: tuple[ProgressivePhase, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AlternatedParams:
    repeats: int
    strong_distance_km: float
    easy_distance_km: float


TemplateParams = Union[EasyRunParams, ProgressiveParams, AlternatedParams]


@dataclass(frozen=True)
class WorkoutDraft:
    """View-model produced by the template expander.

    Recomputed from scratch on every form change; carries no identity.
    """

    blocks: tuple[WorkoutBlock, ...]
    total_km: float
    template_type: WorkoutTemplate
    template_params: TemplateParams
    share_title: str

    @property
    def main_blocks(self) -> tuple[WorkoutBlock, ...]:
        return tuple(b for b in self.blocks if b.segment_kind == SegmentKind.MAIN)
