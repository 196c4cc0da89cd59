"""Schema-tolerant workout persistence.

The ``workouts`` table has check constraints on ``status`` and
``template_type`` whose accepted spellings differ between deployments
(Portuguese vs English, lower vs upper case). Rather than guess one, a
save walks an ordered list of candidates and keeps the first combination
the backend accepts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from pacelink_engine.models.enums import (
    TEMPLATE_KEYS,
    TEMPLATE_UI_KEYS,
    SaveIntent,
    WorkoutTemplate,
)

from pacelink_client.config import DRAFT_STATUSES, READY_STATUSES
from pacelink_client.exceptions import (
    ConstraintMismatchError,
    PersistenceError,
    UniquenessConflictError,
)

logger = logging.getLogger(__name__)

CHECK_VIOLATION = "23514"
UNIQUE_VIOLATION = "23505"
_ENUM_CONSTRAINTS = ("workouts_template_type_check", "workouts_status_check")


@dataclass(frozen=True)
class SaveCandidates:
    """Ordered ``status`` spellings to try per save intent."""

    draft_statuses: tuple[str, ...] = DRAFT_STATUSES
    ready_statuses: tuple[str, ...] = READY_STATUSES

    def statuses_for(self, intent: SaveIntent) -> tuple[str, ...]:
        if intent == SaveIntent.READY:
            return self.ready_statuses
        return self.draft_statuses


def template_type_candidates(template: WorkoutTemplate) -> list[str]:
    """e.g. ``['progressivo', 'Progressivo', 'PROGRESSIVO', 'progressive', 'PROGRESSIVE']``."""
    pt = TEMPLATE_UI_KEYS[template]
    en = TEMPLATE_KEYS[template]
    ordered = [pt, pt[:1].upper() + pt[1:], pt.upper(), en, en.upper()]
    return list(dict.fromkeys(ordered))


def classify_error(exc: Exception) -> PersistenceError:
    """Translate a raw backend exception into the PersistenceError family.

    Reads the Postgres error ``code`` and ``message`` attributes carried by
    postgrest errors; anything without them falls back to ``str(exc)``.
    """
    code = getattr(exc, "code", None)
    code = str(code) if code is not None else None
    message = getattr(exc, "message", None) or str(exc)

    if code == CHECK_VIOLATION or any(name in message for name in _ENUM_CONSTRAINTS):
        return ConstraintMismatchError(message, code)
    if code == UNIQUE_VIOLATION:
        return UniquenessConflictError(message, code)
    return PersistenceError(message, code)


def save_with_fallbacks(
    write: Callable[[dict], dict],
    base_payload: dict,
    statuses: Sequence[str],
    template_types: Sequence[str],
    probe: Optional[Callable[[], Optional[dict]]] = None,
) -> dict:
    """Write *base_payload* with the first accepted (status, template_type).

    Statuses form the outer loop, template types the inner one. Only
    ``ConstraintMismatchError`` moves on to the next candidate; any other
    error propagates immediately.

    Parameters
    ----------
    write : callable
        Performs one insert or update and returns the written row. Must
        raise errors already translated by :func:`classify_error`.
    base_payload : dict
        Row without ``status`` / ``template_type``.
    statuses, template_types : sequence of str
        Candidates in try order.
    probe : callable, optional
        Called before every retry. If it returns a row, an earlier attempt
        was committed despite reporting an error, and that row is returned
        instead of writing again.

    Returns
    -------
    dict
        The row returned by the successful write.

    Raises
    ------
    ConstraintMismatchError
        The last rejection, once every combination has been tried.
    """
    if not statuses or not template_types:
        raise ValueError("At least one status and one template_type candidate are required")

    last_error: ConstraintMismatchError | None = None
    for status in statuses:
        for template_type in template_types:
            if last_error is not None and probe is not None:
                existing = probe()
                if existing:
                    logger.warning("Previous attempt was committed, returning existing row")
                    return existing

            payload = {**base_payload, "status": status, "template_type": template_type}
            try:
                row = write(payload)
            except ConstraintMismatchError as exc:
                logger.warning(
                    "Rejected status=%r template_type=%r: %s", status, template_type, exc
                )
                last_error = exc
                continue

            logger.info("Saved with status=%r template_type=%r", status, template_type)
            return row

    raise last_error


def first_row(data: Any) -> Optional[dict]:
    """First row of a postgrest ``.data`` payload, or None."""
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None
