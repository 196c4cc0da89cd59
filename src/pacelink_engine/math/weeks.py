"""Training-week bucketing. Weeks run Monday to Sunday."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional
from zoneinfo import ZoneInfo

from pacelink_engine.math.pace import round_half_away
from pacelink_engine.models.enums import (
    DEFAULT_SUMMARY_WEEKS,
    DEFAULT_TIMEZONE,
    DEFAULT_WEEKS_AHEAD,
)


@dataclass(frozen=True)
class TrainingWeek:
    """One Monday-Sunday bucket for a student."""

    student_id: str
    trainer_id: str
    week_start: date
    week_end: date
    label: str

    def to_row(self) -> dict:
        return {
            "student_id": self.student_id,
            "trainer_id": self.trainer_id,
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "label": self.label,
        }


@dataclass(frozen=True)
class WeekSummary:
    """Planned vs. executed volume for one training week."""

    week_start: date
    week_end: date
    label: str
    ready: int = 0
    completed: int = 0
    pending: int = 0
    canceled: int = 0
    planned_km: float = 0.0
    actual_km: float = 0.0
    avg_rpe: Optional[float] = None

    @property
    def adherence(self) -> float:
        """Completed / published workouts, 0.0 when nothing was published."""
        return self.completed / self.ready if self.ready > 0 else 0.0


def local_today(tz_name: str = DEFAULT_TIMEZONE, now: datetime | None = None) -> date:
    """Calendar date in *tz_name*. *now* must be timezone-aware when given."""
    zone = ZoneInfo(tz_name)
    current = now.astimezone(zone) if now is not None else datetime.now(zone)
    return current.date()


def week_start(d: date) -> date:
    """Return the Monday on or before *d*."""
    return d - timedelta(days=d.weekday())


def week_label(start: date, end: date) -> str:
    """e.g. ``'Semana 13/10 – 19/10'``."""
    return f"Semana {start:%d/%m} – {end:%d/%m}"


def upcoming_weeks(
    student_id: str,
    trainer_id: str,
    today: date,
    count: int = DEFAULT_WEEKS_AHEAD,
) -> list[TrainingWeek]:
    """Current week plus the following ``count - 1`` weeks."""
    base = week_start(today)
    weeks: list[TrainingWeek] = []
    for i in range(count):
        start = base + timedelta(weeks=i)
        end = start + timedelta(days=6)
        weeks.append(TrainingWeek(
            student_id=student_id,
            trainer_id=trainer_id,
            week_start=start,
            week_end=end,
            label=week_label(start, end),
        ))
    return weeks


def summarize_weeks(
    rows: Iterable[dict[str, Any]],
    limit: int = DEFAULT_SUMMARY_WEEKS,
) -> list[WeekSummary]:
    """Merge week-summary rows by ``week_start``, newest week first.

    Counts and km are summed; ``avg_rpe`` is the mean of the rows that carry
    one. Rows without a parseable ``week_start`` are ignored. At most *limit*
    weeks are returned.
    """
    buckets: dict[date, dict[str, Any]] = {}
    for row in rows:
        start = _to_date(row.get("week_start"))
        if start is None:
            continue
        bucket = buckets.get(start)
        if bucket is None:
            end = _to_date(row.get("week_end")) or start + timedelta(days=6)
            bucket = buckets[start] = {
                "week_end": end,
                "label": row.get("label") or week_label(start, end),
                "ready": 0, "completed": 0, "pending": 0, "canceled": 0,
                "planned_km": 0.0, "actual_km": 0.0, "rpe": [],
            }
        for key in ("ready", "completed", "pending", "canceled"):
            bucket[key] += int(_number(row.get(key)))
        bucket["planned_km"] += _number(row.get("planned_km"))
        bucket["actual_km"] += _number(row.get("actual_km"))
        if row.get("avg_rpe") is not None:
            bucket["rpe"].append(_number(row.get("avg_rpe")))

    summaries = []
    for start in sorted(buckets, reverse=True)[:max(limit, 0)]:
        b = buckets[start]
        summaries.append(WeekSummary(
            week_start=start,
            week_end=b["week_end"],
            label=str(b["label"]),
            ready=b["ready"],
            completed=b["completed"],
            pending=b["pending"],
            canceled=b["canceled"],
            planned_km=round_half_away(b["planned_km"], 1),
            actual_km=round_half_away(b["actual_km"], 1),
            avg_rpe=_mean(b["rpe"]),
        ))
    return summaries


def summary_totals(weeks: list[WeekSummary]) -> Optional[WeekSummary]:
    """Collapse *weeks* into one period summary; None for an empty list."""
    if not weeks:
        return None
    start = min(w.week_start for w in weeks)
    end = max(w.week_end for w in weeks)
    return WeekSummary(
        week_start=start,
        week_end=end,
        label=f"Período {start:%d/%m} – {end:%d/%m}",
        ready=sum(w.ready for w in weeks),
        completed=sum(w.completed for w in weeks),
        pending=sum(w.pending for w in weeks),
        canceled=sum(w.canceled for w in weeks),
        planned_km=round_half_away(sum(w.planned_km for w in weeks), 1),
        actual_km=round_half_away(sum(w.actual_km for w in weeks), 1),
        avg_rpe=_mean([w.avg_rpe for w in weeks if w.avg_rpe is not None]),
    )


def _to_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _number(value: Any) -> float:
    try:
        result = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def _mean(values: list[float]) -> Optional[float]:
    if not values:
        return None
    return round_half_away(sum(values) / len(values), 1)
