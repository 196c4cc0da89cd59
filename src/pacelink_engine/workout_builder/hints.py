"""Block hints — short execution notes keyed by (template, segment, intensity).

Shown to the student under each block of a shared workout.
"""

from __future__ import annotations

from pacelink_engine.models.enums import IntensityLevel, SegmentKind, WorkoutTemplate

# ---------------------------------------------------------------------------
# Hint lookup: (WorkoutTemplate | None, SegmentKind, IntensityLevel | None)
# A None template / intensity means "any".
# ---------------------------------------------------------------------------

_HINTS: dict[tuple[WorkoutTemplate | None, SegmentKind, IntensityLevel | None], str] = {
    # --- Generic ---
    (None, SegmentKind.WARMUP, None): "Ritmo confortável para preparar o corpo.",
    (None, SegmentKind.COOLDOWN, None): "Reduza o ritmo gradualmente para recuperar.",

    # --- Rodagem ---
    (WorkoutTemplate.EASY_RUN, SegmentKind.MAIN, IntensityLevel.LIGHT): (
        "Leve e constante. Foque em respirar e manter técnica."
    ),
    (WorkoutTemplate.EASY_RUN, SegmentKind.MAIN, None): (
        "Moderado e constante. Sustente sem “quebrar”."
    ),

    # --- Progressivo ---
    (WorkoutTemplate.PROGRESSIVE, SegmentKind.MAIN, IntensityLevel.LIGHT): (
        "Comece controlado, foco em eficiência."
    ),
    (WorkoutTemplate.PROGRESSIVE, SegmentKind.MAIN, IntensityLevel.MODERATE): (
        "Aumente gradualmente mantendo controle."
    ),
    (WorkoutTemplate.PROGRESSIVE, SegmentKind.MAIN, None): (
        "Feche forte sem perder a técnica."
    ),

    # --- Alternado ---
    (WorkoutTemplate.ALTERNATED, SegmentKind.MAIN, IntensityLevel.STRONG): (
        "Forte. Foque em postura e cadência."
    ),
    (WorkoutTemplate.ALTERNATED, SegmentKind.MAIN, None): (
        "Solte e recupere. Respiração e técnica."
    ),
}


def get_hint(
    template: WorkoutTemplate,
    segment: SegmentKind,
    intensity: IntensityLevel,
) -> str | None:
    """Look up the hint for a block.

    Falls back from the exact intensity to the template's catch-all entry,
    then to the generic entry for the segment. Returns None when nothing
    matches.
    """
    for key in (
        (template, segment, intensity),
        (template, segment, None),
        (None, segment, None),
    ):
        if key in _HINTS:
            return _HINTS[key]
    return None
