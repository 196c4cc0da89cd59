"""High-level PaceLink backend facade.

All methods wrap raw supabase-py query builders with error translation and
retry logic. Workout writes go through the schema-tolerant save loop in
:mod:`pacelink_client.persistence`.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional, Sequence

from supabase import Client

from pacelink_engine.math.weeks import (
    TrainingWeek,
    WeekSummary,
    local_today,
    summarize_weeks,
    upcoming_weeks,
)
from pacelink_engine.models.enums import (
    DEFAULT_SUMMARY_WEEKS,
    DEFAULT_WEEKS_AHEAD,
    EXECUTION_STATUS_KEYS,
    ExecutionStatus,
    SaveIntent,
)
from pacelink_engine.models.execution import ExecutionReport
from pacelink_engine.models.form_state import WorkoutForm
from pacelink_engine.serialization.payload import to_workout_payload
from pacelink_engine.workout_builder.builder import expand_workout

from pacelink_client.auth import create_session, current_user
from pacelink_client.config import SUPABASE_ANON_KEY, SUPABASE_URL, TIMEZONE
from pacelink_client.exceptions import (
    ExecutionRefusedError,
    PaceLinkClientError,
    PersistenceError,
    RateLimitError,
)
from pacelink_client.persistence import (
    SaveCandidates,
    classify_error,
    first_row,
    save_with_fallbacks,
    template_type_candidates,
)
from pacelink_client.row_mapper import (
    map_execution_row,
    map_student_row,
    map_workout_row,
    pick_latest_executions,
)
from pacelink_client.slugs import generate_unique_slug

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2

_ACTIVE_STATUSES = [
    EXECUTION_STATUS_KEYS[ExecutionStatus.RUNNING],
    EXECUTION_STATUS_KEYS[ExecutionStatus.PAUSED],
]
_COMPLETED = EXECUTION_STATUS_KEYS[ExecutionStatus.COMPLETED]
_RUNNING = EXECUTION_STATUS_KEYS[ExecutionStatus.RUNNING]


@dataclass(frozen=True)
class SavedWorkout:
    """Identity of a persisted workout."""

    id: str
    share_slug: Optional[str] = None


class PaceLinkClient:
    """Facade for workout, week and execution operations."""

    def __init__(
        self,
        url: str | None = None,
        key: str | None = None,
        candidates: SaveCandidates | None = None,
    ) -> None:
        self._supabase = create_session(url or SUPABASE_URL, key or SUPABASE_ANON_KEY)
        self._candidates = candidates or SaveCandidates()

    @classmethod
    def from_client(
        cls, supabase: Client, candidates: SaveCandidates | None = None,
    ) -> "PaceLinkClient":
        """Construct from an existing (possibly already signed-in) Supabase client."""
        obj = cls.__new__(cls)
        obj._supabase = supabase
        obj._candidates = candidates or SaveCandidates()
        return obj

    @property
    def supabase(self) -> Client:
        return self._supabase

    def trainer_id(self) -> str:
        """Id of the signed-in coach. Raises ``AuthExpiredError`` without a session."""
        return str(current_user(self._supabase).id)

    # ------------------------------------------------------------------
    # Students and weeks
    # ------------------------------------------------------------------

    def get_student(self, student_id: str) -> Optional[dict]:
        rows = self._execute(
            self._supabase.table("students").select("*").eq("id", student_id).limit(1)
        )
        row = first_row(rows)
        return map_student_row(row) if row else None

    def list_students(self, trainer_id: str | None = None) -> list[dict]:
        """Students ordered by name; all students visible to the key when *trainer_id* is None."""
        query = self._supabase.table("students").select("*")
        if trainer_id is not None:
            query = query.eq("trainer_id", trainer_id)
        rows = self._execute(query.order("name")) or []
        return [map_student_row(r) for r in rows]

    def list_weeks(self, student_id: str) -> list[dict]:
        return self._execute(
            self._supabase.table("training_weeks")
            .select("id,week_start,week_end,label")
            .eq("student_id", student_id)
            .order("week_start")
        ) or []

    def ensure_upcoming_weeks(
        self,
        student: dict,
        count: int = DEFAULT_WEEKS_AHEAD,
        today: date | None = None,
    ) -> list[TrainingWeek]:
        """Make sure *student* has the current week and the next ``count - 1``.

        Existing weeks are left untouched (upsert on student_id, week_start).
        """
        weeks = upcoming_weeks(
            student["id"], student["trainer_id"], today or local_today(TIMEZONE), count
        )
        self._execute(
            self._supabase.table("training_weeks").upsert(
                [w.to_row() for w in weeks], on_conflict="student_id,week_start"
            )
        )
        logger.info("Ensured %d weeks for student %s", len(weeks), student["id"])
        return weeks

    # ------------------------------------------------------------------
    # Workout writes
    # ------------------------------------------------------------------

    def save_draft(
        self,
        form: WorkoutForm,
        student_id: str,
        workout_id: str | None = None,
        week_id: str | None = None,
        today: date | None = None,
    ) -> SavedWorkout:
        """Expand *form* and save it as a draft (insert, or update *workout_id*)."""
        row = self._save_workout(
            form, student_id, SaveIntent.DRAFT, workout_id, week_id, None, today
        )
        return SavedWorkout(id=str(row["id"]), share_slug=row.get("share_slug"))

    def share_workout(
        self,
        form: WorkoutForm,
        student_id: str,
        workout_id: str | None = None,
        week_id: str | None = None,
        today: date | None = None,
    ) -> SavedWorkout:
        """Save *form* as ready and return its share slug.

        A workout that was shared before keeps its slug so links already sent
        to the student stay valid; otherwise a unique slug is minted.
        """
        existing = self._find_workout(workout_id) if workout_id is not None else None
        if existing is not None and existing.get("share_slug"):
            row = self._save_workout(
                form, student_id, SaveIntent.READY, workout_id, week_id, None, today
            )
            slug = existing["share_slug"]
            logger.info("Re-shared workout %s as %s", row["id"], slug)
            return SavedWorkout(id=str(row["id"]), share_slug=row.get("share_slug") or slug)

        saved: dict[str, dict] = {}

        def persist(slug: str) -> None:
            saved["row"] = self._save_workout(
                form, student_id, SaveIntent.READY, workout_id, week_id, slug, today
            )

        slug = generate_unique_slug(persist)
        row = saved["row"]
        logger.info("Shared workout %s as %s", row["id"], slug)
        return SavedWorkout(id=str(row["id"]), share_slug=row.get("share_slug") or slug)

    def publish_workout(self, workout_id: str) -> SavedWorkout:
        """Flip an existing workout to ready.

        The backend may assign a share slug in a trigger; one is minted here
        only when it did not.
        """
        current = first_row(self._execute(
            self._supabase.table("workouts")
            .select("id,template_type,share_slug")
            .eq("id", workout_id)
            .limit(1)
        ))
        if current is None:
            raise PersistenceError(f"Workout {workout_id} not found")

        row = save_with_fallbacks(
            lambda payload: self._update_workout(workout_id, payload),
            {},
            self._candidates.statuses_for(SaveIntent.READY),
            [current["template_type"]],
        )
        slug = row.get("share_slug") or current.get("share_slug")
        if not slug:
            slug = generate_unique_slug(
                lambda candidate: self._update_workout(workout_id, {"share_slug": candidate})
            )
        logger.info("Published workout %s", workout_id)
        return SavedWorkout(id=str(workout_id), share_slug=slug)

    # ------------------------------------------------------------------
    # Workout reads
    # ------------------------------------------------------------------

    def list_week_workouts(self, week_id: str) -> list[dict]:
        rows = self._execute(
            self._supabase.table("workouts")
            .select("*")
            .eq("week_id", week_id)
            .order("planned_date")
        ) or []
        return [map_workout_row(r) for r in rows]

    def get_public_workout(self, share_slug: str) -> Optional[dict]:
        """Look up a shared workout by slug through the public view."""
        row = first_row(self._execute(
            self._supabase.table("v_workouts_public")
            .select("*")
            .eq("share_slug", share_slug)
            .limit(1)
        ))
        return map_workout_row(row) if row else None

    def get_week_dashboard(self, week_id: str, trainer_id: str | None = None) -> list[dict]:
        """Raw ``v2_trainer_week_dashboard`` rows for one week of the coach."""
        return self._execute(
            self._supabase.table("v2_trainer_week_dashboard")
            .select("*")
            .eq("trainer_id", trainer_id or self.trainer_id())
            .eq("week_id", week_id)
        ) or []

    def get_student_week_summary(
        self, student_id: str, limit: int = DEFAULT_SUMMARY_WEEKS,
    ) -> list[WeekSummary]:
        """Planned vs. executed volume for the student's *limit* most recent weeks."""
        rows = self._execute(
            self._supabase.table("v2_student_week_summary")
            .select("*")
            .eq("student_id", student_id)
            .order("week_start", desc=True)
            .limit(max(limit, 1) * 3)
        ) or []
        return summarize_weeks(rows, limit)

    def latest_executions(self, workout_ids: Sequence[str]) -> dict[str, Optional[dict]]:
        """Most recent execution per workout id."""
        if not workout_ids:
            return {}
        rows = self._execute(
            self._supabase.table("executions")
            .select("id,workout_id,student_id,status,started_at,last_event_at,"
                    "completed_at,performed_at,actual_total_km,rpe,comment")
            .in_("workout_id", list(workout_ids))
        ) or []
        return pick_latest_executions(rows, workout_ids)

    # ------------------------------------------------------------------
    # Executions (public link flow)
    # ------------------------------------------------------------------

    def start_execution(
        self,
        workout_id: str,
        student_id: str,
        preview: bool = False,
        performed_at: date | None = None,
    ) -> dict:
        """Start (or resume) the student's execution of a published workout."""
        workout = self._executable_workout(workout_id, student_id, preview)

        active = self._active_execution(workout_id, student_id)
        if active is not None:
            logger.info("Reusing execution %s for workout %s", active["id"], workout_id)
            return map_execution_row(active)

        row = first_row(self._execute(
            self._supabase.table("executions").insert({
                **self._execution_identity(workout),
                "status": _RUNNING,
                "performed_at": (performed_at or local_today(TIMEZONE)).isoformat(),
            })
        ))
        if row is None:
            raise PersistenceError("Failed to start execution")
        logger.info("Started execution %s for workout %s", row.get("id"), workout_id)
        return map_execution_row(row)

    def complete_execution(
        self,
        workout_id: str,
        student_id: str,
        report: ExecutionReport,
        preview: bool = False,
    ) -> dict:
        """Record a finished run, completing the active execution if any."""
        report.validate()
        workout = self._executable_workout(workout_id, student_id, preview)

        now = datetime.now(timezone.utc).isoformat()
        fields = {
            **report.to_row(),
            "status": _COMPLETED,
            "completed_at": now,
            "last_event_at": now,
        }

        active = self._active_execution(workout_id, student_id)
        if active is None:
            query = self._supabase.table("executions").insert(
                {**self._execution_identity(workout), **fields}
            )
        else:
            query = self._supabase.table("executions").update(fields).eq("id", active["id"])

        row = first_row(self._execute(query))
        if row is None:
            raise PersistenceError("Failed to complete execution")
        logger.info("Completed execution %s for workout %s", row.get("id"), workout_id)
        return map_execution_row(row)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _save_workout(
        self,
        form: WorkoutForm,
        student_id: str,
        intent: SaveIntent,
        workout_id: str | None,
        week_id: str | None,
        share_slug: str | None,
        today: date | None,
    ) -> dict:
        trainer_id = self.trainer_id()
        draft = expand_workout(form, today or local_today(TIMEZONE))
        base = to_workout_payload(draft, form, trainer_id, student_id, share_slug)
        if share_slug is None:
            # Keep whatever slug an existing row already has
            base.pop("share_slug")
        if week_id is not None:
            base["week_id"] = week_id

        statuses = self._candidates.statuses_for(intent)
        template_types = template_type_candidates(form.template)

        if workout_id is not None:
            return save_with_fallbacks(
                lambda payload: self._update_workout(workout_id, payload),
                base, statuses, template_types,
            )

        new_id = str(uuid.uuid4())
        base["id"] = new_id
        return save_with_fallbacks(
            self._insert_workout,
            base, statuses, template_types,
            probe=lambda: self._find_workout(new_id),
        )

    def _insert_workout(self, payload: dict) -> dict:
        row = first_row(self._execute(self._supabase.table("workouts").insert(payload)))
        if row is None:
            raise PersistenceError("Insert returned no row")
        return row

    def _update_workout(self, workout_id: str, payload: dict) -> dict:
        row = first_row(self._execute(
            self._supabase.table("workouts").update(payload).eq("id", workout_id)
        ))
        if row is None:
            raise PersistenceError(f"Workout {workout_id} not found")
        return row

    def _find_workout(self, workout_id: str) -> Optional[dict]:
        return first_row(self._execute(
            self._supabase.table("workouts")
            .select("id,share_slug")
            .eq("id", workout_id)
            .limit(1)
        ))

    def _executable_workout(self, workout_id: str, student_id: str, preview: bool) -> dict:
        workout = first_row(self._execute(
            self._supabase.table("workouts")
            .select("id,student_id,trainer_id,status,version")
            .eq("id", workout_id)
            .eq("student_id", student_id)
            .limit(1)
        ))
        if workout is None:
            raise PersistenceError(f"Workout {workout_id} not found")
        if preview:
            return workout

        if workout.get("status") not in self._candidates.ready_statuses:
            raise ExecutionRefusedError("Workout is not published yet (status != ready)")
        completed = self._execute(
            self._supabase.table("executions")
            .select("id")
            .eq("workout_id", workout_id)
            .eq("student_id", student_id)
            .eq("status", _COMPLETED)
            .limit(1)
        )
        if completed:
            raise ExecutionRefusedError("Execution already recorded and cannot be changed")
        return workout

    def _active_execution(self, workout_id: str, student_id: str) -> Optional[dict]:
        return first_row(self._execute(
            self._supabase.table("executions")
            .select("id,workout_id,student_id,status,started_at,last_event_at,performed_at")
            .eq("workout_id", workout_id)
            .eq("student_id", student_id)
            .in_("status", _ACTIVE_STATUSES)
            .order("last_event_at", desc=True, nullsfirst=False)
            .limit(1)
        ))

    @staticmethod
    def _execution_identity(workout: dict) -> dict:
        version = workout.get("version")
        locked = version if isinstance(version, int) else 1
        return {
            "workout_id": workout["id"],
            "student_id": workout["student_id"],
            "trainer_id": workout["trainer_id"],
            "locked_version": locked,
            "workout_version": locked,
        }

    def _execute(self, query: Any) -> Any:
        """Run a query builder and return its ``data``."""
        return self._safe_call(query.execute).data

    def _safe_call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call *fn* with retry + exponential backoff on 429; translate other errors."""
        last_exc: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                return fn(*args, **kwargs)
            except PaceLinkClientError:
                raise
            except Exception as exc:
                last_exc = exc
                status = getattr(exc, "status", None) or getattr(
                    exc, "status_code", None
                )
                if status == 429 or str(getattr(exc, "code", "")) == "429":
                    wait = _BASE_BACKOFF_S * (2 ** attempt)
                    logger.warning(
                        "Rate limited (attempt %d/%d), retrying in %ds",
                        attempt + 1,
                        _MAX_RETRIES,
                        wait,
                    )
                    time.sleep(wait)
                    continue
                # Non-retryable error
                raise classify_error(exc) from exc

        raise RateLimitError(
            f"Rate limited after {_MAX_RETRIES} retries: {last_exc}"
        )
