"""Pure functions mapping backend rows to canonical engine values.

No I/O. Rows written by older app versions use other key spellings
(``distanceKm``, ``type``, ``full_name``, ``p1k_pace`` as text ...); every
such fallback lives here and nowhere else.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional, Sequence

from pacelink_engine.math.pace import InvalidArgument, parse_pace
from pacelink_engine.models.enums import (
    EXECUTION_STATUS_KEYS,
    SEGMENT_KEYS,
    ExecutionStatus,
    SegmentKind,
)
from pacelink_engine.models.intensity import normalize_intensity
from pacelink_engine.models.workout import PaceRange, WorkoutBlock

_SEGMENT_BY_KEY = {key: kind for kind, key in SEGMENT_KEYS.items()}
_EXECUTION_STATUS_BY_KEY = {key: status for status, key in EXECUTION_STATUS_KEYS.items()}

# Legacy spellings, preferred key first
_BLOCK_DISTANCE_KEYS = ("distance_km", "distanceKm", "dist_km", "km", "distance")
_BLOCK_SEGMENT_KEYS = ("segment_type", "segmentType", "type", "kind")
_BLOCK_PACE_MIN_KEYS = ("pace_min_sec_per_km", "paceMinSecPerKm", "pace_min")
_BLOCK_PACE_MAX_KEYS = ("pace_max_sec_per_km", "paceMaxSecPerKm", "pace_max")
_BLOCK_HINT_KEYS = ("hint_text", "hintText", "hint", "note")
_STUDENT_NAME_KEYS = ("name", "full_name")
_EXECUTION_TIME_KEYS = ("last_event_at", "completed_at", "started_at")


def map_block_row(row: dict[str, Any], index: int) -> WorkoutBlock:
    """Map one element of a stored ``blocks`` array to a WorkoutBlock.

    *index* is the element's position, used when the row has no ``index``.
    """
    segment_raw = _first(row, _BLOCK_SEGMENT_KEYS)
    segment = _SEGMENT_BY_KEY.get(str(segment_raw).lower(), SegmentKind.MAIN)

    pace_min = _to_float(_first(row, _BLOCK_PACE_MIN_KEYS))
    pace_max = _to_float(_first(row, _BLOCK_PACE_MAX_KEYS))
    pace_range = None
    if pace_min is not None and pace_max is not None:
        pace_range = PaceRange(min_sec_per_km=pace_min, max_sec_per_km=pace_max)

    order_index = row.get("index")
    return WorkoutBlock(
        order_index=order_index if isinstance(order_index, int) else index,
        segment_kind=segment,
        label=str(row.get("label") or ""),
        distance_km=_to_float(_first(row, _BLOCK_DISTANCE_KEYS)) or 0.0,
        intensity=normalize_intensity(row.get("intensity")),
        pace_range=pace_range,
        hint_text=_first(row, _BLOCK_HINT_KEYS) or None,
    )


def map_workout_row(row: dict[str, Any]) -> dict[str, Any]:
    """Map a ``workouts`` (or ``v_workouts_public``) row.

    Returns a dict with keys:
        id, student_id, trainer_id, status, template_type, title,
        share_slug, total_km, blocks, week_id, planned_date, version
    """
    raw_blocks = row.get("blocks") or []
    blocks = tuple(
        map_block_row(b, i) for i, b in enumerate(raw_blocks) if isinstance(b, dict)
    )
    total_km = _to_float(row.get("total_km"))
    if total_km is None:
        total_km = round(sum(b.distance_km for b in blocks), 1)

    version = row.get("version")
    return {
        "id": row.get("id"),
        "student_id": row.get("student_id"),
        "trainer_id": row.get("trainer_id"),
        "status": row.get("status"),
        "template_type": row.get("template_type"),
        "title": row.get("title"),
        "share_slug": row.get("share_slug"),
        "total_km": total_km,
        "blocks": blocks,
        "week_id": row.get("week_id"),
        "planned_date": row.get("planned_date"),
        "version": version if isinstance(version, int) else 1,
    }


def map_student_row(row: dict[str, Any]) -> dict[str, Any]:
    """Map a ``students`` row.

    The reference pace is ``p1k_sec_per_km`` (seconds) on current rows and
    ``p1k_pace`` ("M:SS" text) on older ones; unparsable values become None.
    """
    p1k = _to_float(row.get("p1k_sec_per_km"))
    if p1k is None and row.get("p1k_pace"):
        try:
            p1k = float(parse_pace(str(row["p1k_pace"])))
        except InvalidArgument:
            p1k = None
    if p1k is not None and p1k <= 0:
        p1k = None

    return {
        "id": row.get("id"),
        "trainer_id": row.get("trainer_id"),
        "name": _first(row, _STUDENT_NAME_KEYS) or "",
        "email": row.get("email"),
        "public_slug": row.get("public_slug"),
        "p1k_sec_per_km": p1k,
    }


def map_execution_row(row: dict[str, Any]) -> dict[str, Any]:
    """Map an ``executions`` row; unknown statuses become None."""
    status_raw = row.get("status")
    status = _EXECUTION_STATUS_BY_KEY.get(str(status_raw).lower()) if status_raw else None
    return {
        "id": row.get("id"),
        "workout_id": row.get("workout_id"),
        "student_id": row.get("student_id"),
        "status": status,
        "performed_at": row.get("performed_at"),
        "started_at": row.get("started_at"),
        "completed_at": row.get("completed_at"),
        "last_event_at": row.get("last_event_at"),
        "actual_total_km": _to_float(row.get("actual_total_km")),
        "rpe": row.get("rpe"),
        "comment": row.get("comment"),
    }


def pick_latest_executions(
    rows: Iterable[dict[str, Any]],
    workout_ids: Sequence[str],
) -> dict[str, Optional[dict[str, Any]]]:
    """Most recent mapped execution per workout id (None when there is none).

    Recency is the first present of last_event_at, completed_at,
    started_at. Timestamps are ISO-8601 strings from the same backend, so
    string comparison orders them.
    """
    latest: dict[str, Optional[dict[str, Any]]] = {wid: None for wid in workout_ids}
    for row in rows:
        execution = map_execution_row(row)
        wid = execution["workout_id"]
        if wid not in latest:
            continue
        current = latest[wid]
        if current is None or _event_time(execution) > _event_time(current):
            latest[wid] = execution
    return latest


def is_completed(execution: Optional[dict[str, Any]]) -> bool:
    return execution is not None and execution["status"] == ExecutionStatus.COMPLETED


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _first(row: dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _event_time(execution: dict[str, Any]) -> str:
    return _first(execution, _EXECUTION_TIME_KEYS) or ""
