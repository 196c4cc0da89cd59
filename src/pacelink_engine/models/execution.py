"""Execution report — what a student logs after running a shared workout."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date

from pacelink_engine.exceptions import InvalidArgument
from pacelink_engine.models.enums import RPE_MAX, RPE_MIN


@dataclass(frozen=True)
class ExecutionReport:
    """Completed-run data submitted from the public workout link.

    ``actual_blocks`` holds the per-block actual values as the student
    entered them; it is stored verbatim.
    """

    performed_at: date
    actual_total_km: float | None = None
    rpe: int | None = None
    comment: str | None = None
    actual_blocks: tuple[dict, ...] = field(default_factory=tuple)

    def validate(self) -> "ExecutionReport":
        """Check value ranges and return self.

        Raises:
            InvalidArgument: If the distance is negative/non-finite or the
                RPE is outside 1-10 or not a whole number.
        """
        if self.actual_total_km is not None:
            if not math.isfinite(self.actual_total_km) or self.actual_total_km < 0:
                raise InvalidArgument(
                    f"actual_total_km must be a non-negative number, got {self.actual_total_km!r}"
                )
        if self.rpe is not None:
            if (
                isinstance(self.rpe, bool)
                or not float(self.rpe).is_integer()
                or not RPE_MIN <= self.rpe <= RPE_MAX
            ):
                raise InvalidArgument(
                    f"rpe must be an integer between {RPE_MIN} and {RPE_MAX}, got {self.rpe!r}"
                )
        return self

    def to_row(self) -> dict:
        """Columns written to ``executions`` when the run is completed."""
        comment = (self.comment or "").strip() or None
        return {
            "performed_at": self.performed_at.isoformat(),
            "actual_total_km": self.actual_total_km if self.actual_total_km is not None else 0,
            "actual_blocks": list(self.actual_blocks),
            "rpe": int(self.rpe) if self.rpe is not None else None,
            "comment": comment,
        }
