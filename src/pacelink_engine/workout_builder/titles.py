"""Share titles — the short name shown with a public workout link."""

from __future__ import annotations

from datetime import date

from pacelink_engine.models.enums import TEMPLATE_DISPLAY_NAMES, WorkoutTemplate


def build_share_title(template: WorkoutTemplate, today: date) -> str:
    """e.g. ``'Progressivo • 07/03'`` (day/month of *today*)."""
    return f"{TEMPLATE_DISPLAY_NAMES[template]} • {today:%d/%m}"
