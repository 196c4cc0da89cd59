"""In-memory stand-in for the supabase-py query builder.

Every ``execute()`` consumes the next queued outcome: an exception is
raised, anything else is returned as ``.data``. With an empty queue,
inserts / upserts echo their payload, updates echo the payload merged with
the ``id`` filter, and selects return ``[]``.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from pacelink_client.client import PaceLinkClient


class FakeAPIError(Exception):
    """Shape of postgrest's APIError: ``message`` and ``code`` attributes."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class FakeQuery:
    def __init__(self, backend: "FakeSupabase", table: str) -> None:
        self.backend = backend
        self.table = table
        self.op: str | None = None
        self.columns: str | None = None
        self.payload: Any = None
        self.kwargs: dict = {}
        self.filters: list[tuple] = []

    def select(self, columns: str = "*") -> "FakeQuery":
        if self.op is None:
            self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload: Any) -> "FakeQuery":
        self.op, self.payload = "update", payload
        return self

    def upsert(self, payload: Any, **kwargs: Any) -> "FakeQuery":
        self.op, self.payload, self.kwargs = "upsert", payload, kwargs
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: list) -> "FakeQuery":
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column: str, **kwargs: Any) -> "FakeQuery":
        return self

    def limit(self, n: int) -> "FakeQuery":
        return self

    def filter_value(self, column: str) -> Any:
        for _, col, value in self.filters:
            if col == column:
                return value
        return None

    def execute(self) -> SimpleNamespace:
        self.backend.calls.append(self)
        if self.backend.outcomes:
            outcome = self.backend.outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return SimpleNamespace(data=outcome)
        return SimpleNamespace(data=self._echo())

    def _echo(self) -> Any:
        if self.op == "insert":
            return [dict(self.payload)] if isinstance(self.payload, dict) else list(self.payload)
        if self.op == "upsert":
            return list(self.payload) if isinstance(self.payload, list) else [self.payload]
        if self.op == "update":
            return [{**self.payload, "id": self.filter_value("id")}]
        return []


class FakeSupabase:
    def __init__(self) -> None:
        self.outcomes: list[Any] = []
        self.calls: list[FakeQuery] = []
        self.auth = MagicMock()
        self.auth.get_user.return_value = SimpleNamespace(
            user=SimpleNamespace(id="trainer-1", email="coach@example.com")
        )

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def ops(self) -> list[tuple[str, str]]:
        return [(q.table, q.op) for q in self.calls]

    def writes(self, op: str) -> list[FakeQuery]:
        return [q for q in self.calls if q.op == op]


@pytest.fixture
def backend() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(backend) -> PaceLinkClient:
    return PaceLinkClient.from_client(backend)


@pytest.fixture
def ready_workout_row() -> dict:
    return {
        "id": "w1",
        "student_id": "s1",
        "trainer_id": "t1",
        "status": "ready",
        "version": 2,
    }


@pytest.fixture
def api_error() -> type[FakeAPIError]:
    """Factory for postgrest-shaped errors: ``api_error(message, code)``."""
    return FakeAPIError
