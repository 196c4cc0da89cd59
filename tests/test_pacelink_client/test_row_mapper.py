"""Tests for row mapping and legacy-key tolerance."""

from __future__ import annotations

import pytest

from pacelink_client.row_mapper import (
    is_completed,
    map_block_row,
    map_execution_row,
    map_student_row,
    map_workout_row,
    pick_latest_executions,
)
from pacelink_engine.models.enums import ExecutionStatus, IntensityLevel, SegmentKind
from pacelink_engine.models.workout import PaceRange


class TestMapBlockRow:
    def test_current_row(self) -> None:
        block = map_block_row({
            "index": 1,
            "label": "Trecho principal",
            "segment_type": "main",
            "distance_km": 5.0,
            "intensity": "moderado",
            "pace_min_sec_per_km": 285,
            "pace_max_sec_per_km": 330,
            "hint_text": "Moderado e constante.",
        }, 7)
        assert block.order_index == 1
        assert block.segment_kind == SegmentKind.MAIN
        assert block.distance_km == 5.0
        assert block.intensity == IntensityLevel.MODERATE
        assert block.pace_range == PaceRange(285, 330)
        assert block.hint_text == "Moderado e constante."

    @pytest.mark.parametrize("key", ["distanceKm", "dist_km", "km"])
    def test_legacy_distance_keys(self, key) -> None:
        assert map_block_row({key: "2.5"}, 0).distance_km == 2.5

    def test_legacy_segment_key(self) -> None:
        assert map_block_row({"type": "warmup"}, 0).segment_kind == SegmentKind.WARMUP

    def test_defaults_for_missing_fields(self) -> None:
        block = map_block_row({}, 3)
        assert block.order_index == 3
        assert block.segment_kind == SegmentKind.MAIN
        assert block.distance_km == 0.0
        assert block.intensity == IntensityLevel.UNKNOWN
        assert block.pace_range is None
        assert block.hint_text is None

    def test_half_pace_bounds_are_ignored(self) -> None:
        assert map_block_row({"pace_min_sec_per_km": 285}, 0).pace_range is None

    def test_fractional_pace_bounds_are_kept(self) -> None:
        block = map_block_row(
            {"pace_min_sec_per_km": 225.5, "pace_max_sec_per_km": "260.25"}, 0
        )
        assert block.pace_range == PaceRange(225.5, 260.25)


class TestMapWorkoutRow:
    def test_total_falls_back_to_block_sum(self) -> None:
        row = map_workout_row({"blocks": [{"distance_km": 2}, {"distanceKm": 5.5}, "junk"]})
        assert len(row["blocks"]) == 2
        assert row["total_km"] == 7.5
        assert row["version"] == 1

    def test_stored_total_wins(self) -> None:
        row = map_workout_row({"id": "w1", "total_km": "8.0", "blocks": [], "version": 3})
        assert row["total_km"] == 8.0
        assert row["version"] == 3


class TestMapStudentRow:
    def test_seconds_column(self) -> None:
        row = map_student_row({"id": "s1", "name": "Ana", "p1k_sec_per_km": 255})
        assert row["p1k_sec_per_km"] == 255.0
        assert row["name"] == "Ana"

    def test_text_pace_column(self) -> None:
        assert map_student_row({"p1k_pace": "4:15"})["p1k_sec_per_km"] == 255.0

    @pytest.mark.parametrize("row", [{"p1k_pace": "rápido"}, {"p1k_sec_per_km": 0}, {}])
    def test_unusable_pace_is_none(self, row) -> None:
        assert map_student_row(row)["p1k_sec_per_km"] is None


class TestExecutions:
    def test_status_mapping(self) -> None:
        assert map_execution_row({"status": "completed"})["status"] == ExecutionStatus.COMPLETED
        assert map_execution_row({"status": "weird"})["status"] is None
        assert map_execution_row({})["status"] is None

    def test_pick_latest_prefers_last_event(self) -> None:
        rows = [
            {"id": "e1", "workout_id": "w1", "started_at": "2025-03-10T08:00:00+00:00"},
            {"id": "e2", "workout_id": "w1", "last_event_at": "2025-03-09T08:00:00+00:00",
             "started_at": "2025-03-11T08:00:00+00:00"},
            {"id": "e3", "workout_id": "w9", "last_event_at": "2025-03-12T08:00:00+00:00"},
        ]
        latest = pick_latest_executions(rows, ["w1", "w2"])
        assert latest["w1"]["id"] == "e1"
        assert latest["w2"] is None
        assert "w9" not in latest

    def test_is_completed(self) -> None:
        assert is_completed(map_execution_row({"status": "completed"}))
        assert not is_completed(map_execution_row({"status": "running"}))
        assert not is_completed(None)
