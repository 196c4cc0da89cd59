"""Tests for ExecutionReport validation and row export."""

from __future__ import annotations

import math
from datetime import date

import pytest

from pacelink_engine.math.pace import InvalidArgument
from pacelink_engine.models.execution import ExecutionReport


def _report(**overrides) -> ExecutionReport:
    defaults = dict(performed_at=date(2025, 3, 8), actual_total_km=8.2, rpe=7)
    defaults.update(overrides)
    return ExecutionReport(**defaults)


class TestValidate:
    def test_valid_report_returns_self(self) -> None:
        report = _report()
        assert report.validate() is report

    def test_empty_optional_fields_are_valid(self) -> None:
        _report(actual_total_km=None, rpe=None).validate()

    def test_zero_km_is_valid(self) -> None:
        _report(actual_total_km=0.0).validate()

    @pytest.mark.parametrize("km", [-0.1, math.nan, math.inf])
    def test_invalid_distance(self, km) -> None:
        with pytest.raises(InvalidArgument, match="actual_total_km"):
            _report(actual_total_km=km).validate()

    @pytest.mark.parametrize("rpe", [0, 11, 5.5, True])
    def test_invalid_rpe(self, rpe) -> None:
        with pytest.raises(InvalidArgument, match="rpe"):
            _report(rpe=rpe).validate()

    def test_whole_float_rpe_is_accepted(self) -> None:
        _report(rpe=7.0).validate()


class TestToRow:
    def test_row_shape(self) -> None:
        row = _report(comment="  Bom treino ", actual_blocks=({"index": 0, "km": 2.0},)).to_row()
        assert row == {
            "performed_at": "2025-03-08",
            "actual_total_km": 8.2,
            "actual_blocks": [{"index": 0, "km": 2.0}],
            "rpe": 7,
            "comment": "Bom treino",
        }

    def test_blank_comment_and_missing_km(self) -> None:
        row = _report(actual_total_km=None, rpe=None, comment="   ").to_row()
        assert row["actual_total_km"] == 0
        assert row["rpe"] is None
        assert row["comment"] is None
