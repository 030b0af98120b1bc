from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.db import get_db
from main import app

NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class FakeDatabase:
    """
    Stand-in for `core.db.Database`.

    Results are replayed in order from `queue()`; an exception instance is
    raised instead of returned. Every call is recorded in `calls`.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self._results: list[Any] = []

    def queue(self, *results: Any) -> None:
        self._results.extend(results)

    def _next(self, default: Any) -> Any:
        if not self._results:
            return default
        result = self._results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetch_one(self, sql: str, *args: Any) -> dict | None:
        self.calls.append(("fetch_one", sql, args))
        return self._next(None)

    async def fetch_all(self, sql: str, *args: Any) -> list[dict]:
        self.calls.append(("fetch_all", sql, args))
        return self._next([])

    async def execute(self, sql: str, *args: Any) -> None:
        self.calls.append(("execute", sql, args))
        self._next(None)


def user_row(**overrides: Any) -> dict:
    row = {
        "id": 1,
        "name": "Ada",
        "email": "ada@example.com",
        "role": "client",
        "created_at": NOW,
    }
    row.update(overrides)
    return row


def pantry_row(**overrides: Any) -> dict:
    row = {
        "id": 1,
        "name": "Spice Rack",
        "description": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(fake_db: FakeDatabase):
    # Lifespan is not entered, so no real pool is created.
    app.dependency_overrides[get_db] = lambda: fake_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
