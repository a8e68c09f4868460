"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.db import get_session
from app.main import app


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in connector and endpoint tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None, fail_with: Exception | None = None):
        self._rows = rows or []
        self._fail_with = fail_with
        self.executed: list[tuple[Any, Any]] = []
        self.commits = 0
        self.rollbacks = 0

    async def execute(self, stmt, params=None):
        self.executed.append((stmt, params))
        if self._fail_with is not None:
            raise self._fail_with
        return FakeResult(self._rows)

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _rows in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_goal(
    goal_id: str,
    difficulty: str | None = "medium",
    status: str | None = "in_progress",
    tags: list[str] | None = None,
    is_focus: bool | None = False,
    goal_type: str = "standard",
    **extra: Any,
) -> dict[str, Any]:
    """Helper to build a goal row dict as the connector returns it."""
    row = {
        "id": goal_id,
        "pact_id": "pact-1",
        "name": f"Goal {goal_id}",
        "difficulty": difficulty,
        "status": status,
        "is_focus": is_focus,
        "goal_type": goal_type,
        "tags": tags or [],
        "total_steps": 0,
        "validated_steps": 0,
        "child_goal_ids": None,
        "super_goal_rule": None,
        "is_dynamic_super": False,
    }
    row.update(extra)
    return row


def make_super_row(
    goal_id: str = "sg",
    child_goal_ids: list[str] | None = None,
    rule: dict[str, Any] | None = None,
    is_dynamic: bool = False,
) -> dict[str, Any]:
    return make_goal(
        goal_id,
        difficulty="hard",
        status="in_progress",
        goal_type="super",
        name="Super",
        child_goal_ids=child_goal_ids or [],
        super_goal_rule=rule,
        is_dynamic_super=is_dynamic,
    )
