"""Tests for the nightly weeks job — the backend client is mocked."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from pacelink_client.exceptions import ConfigurationError, PersistenceError
from scheduler.config import TIMEZONE
from scheduler.nightly import nightly_job


def _students() -> list[dict]:
    return [
        {"id": "s1", "trainer_id": "t1"},
        {"id": "s2", "trainer_id": "t1"},
        {"id": "s3", "trainer_id": None},
    ]


class TestNightlyJob:
    def test_ensures_weeks_for_each_student(self, today) -> None:
        client = MagicMock()
        client.list_students.return_value = _students()[:2]
        assert nightly_job(client, today) == 2
        assert client.ensure_upcoming_weeks.call_count == 2
        client.ensure_upcoming_weeks.assert_any_call(_students()[0], 8, today)

    def test_skips_students_without_trainer(self, today) -> None:
        client = MagicMock()
        client.list_students.return_value = _students()
        assert nightly_job(client, today) == 2

    def test_one_failure_does_not_stop_the_run(self, today) -> None:
        client = MagicMock()
        client.list_students.return_value = _students()[:2]
        client.ensure_upcoming_weeks.side_effect = [PersistenceError("boom"), None]
        assert nightly_job(client, today) == 1
        assert client.ensure_upcoming_weeks.call_count == 2

    def test_listing_failure(self, today) -> None:
        client = MagicMock()
        client.list_students.side_effect = PersistenceError("permission denied")
        assert nightly_job(client, today) == 0

    def test_connection_failure(self, today) -> None:
        with patch("scheduler.nightly.PaceLinkClient", side_effect=ConfigurationError("missing")):
            assert nightly_job(today=today) == 0

    def test_default_today_uses_configured_zone(self, today) -> None:
        client = MagicMock()
        client.list_students.return_value = _students()[:1]
        with patch("scheduler.nightly.local_today", return_value=today) as local:
            nightly_job(client)
        local.assert_called_once_with(TIMEZONE)
        client.ensure_upcoming_weeks.assert_called_once_with(_students()[0], 8, today)
