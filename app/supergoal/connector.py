"""Database connector — async access to goals and goal_tags.

Super Goal membership lives on the goal row itself: child_goal_ids (text[]),
super_goal_rule (JSONB, camelCase keys) and is_dynamic_super. Goal sets are
scoped by pact_id. Reads never raise for missing rows; a failed membership
write rolls back and raises PersistenceError.
"""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from sqlalchemy import bindparam, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.supergoal.exceptions import PersistenceError
from app.supergoal.models import Rule, SuperGoal, SuperGoalState

_GOAL_COLUMNS = (
    "g.id, g.pact_id, g.name, g.difficulty, g.status, g.is_focus, g.goal_type, "
    "g.total_steps, g.validated_steps, g.child_goal_ids, g.super_goal_rule, "
    "g.is_dynamic_super, "
    "COALESCE(array_agg(t.tag) FILTER (WHERE t.tag IS NOT NULL), '{}') AS tags"
)


def _normalise(row: dict[str, Any]) -> dict[str, Any]:
    row["id"] = str(row["id"])
    if row.get("pact_id") is not None:
        row["pact_id"] = str(row["pact_id"])
    row["tags"] = list(row.get("tags") or [])
    return row


async def fetch_goal(session: AsyncSession, goal_id: str) -> dict[str, Any] | None:
    query = (
        f"SELECT {_GOAL_COLUMNS} "
        "FROM goals g LEFT JOIN goal_tags t ON t.goal_id = g.id "
        "WHERE g.id = :goal_id "
        "GROUP BY g.id"
    )
    result = await session.execute(text(query), {"goal_id": goal_id})
    row = result.fetchone()
    if row is None:
        return None
    return _normalise(dict(zip(result.keys(), row)))


async def fetch_pact_goals(session: AsyncSession, pact_id: str) -> list[dict[str, Any]]:
    """All goals of a pact (Super Goals included), oldest first, tags attached."""
    query = (
        f"SELECT {_GOAL_COLUMNS} "
        "FROM goals g LEFT JOIN goal_tags t ON t.goal_id = g.id "
        "WHERE g.pact_id = :pact_id "
        "GROUP BY g.id "
        "ORDER BY g.created_at"
    )
    result = await session.execute(text(query), {"pact_id": pact_id})
    columns = result.keys()
    return [_normalise(dict(zip(columns, r))) for r in result.fetchall()]


def super_goal_from_row(row: dict[str, Any]) -> SuperGoal:
    raw_rule = row.get("super_goal_rule")
    if isinstance(raw_rule, str):
        raw_rule = json.loads(raw_rule)
    return SuperGoal(
        id=str(row["id"]),
        name=row.get("name") or "",
        difficulty=row.get("difficulty"),
        pact_id=row.get("pact_id"),
        is_dynamic=bool(row.get("is_dynamic_super")),
        rule=Rule.from_storage(raw_rule),
        child_goal_ids=[str(i) for i in row.get("child_goal_ids") or []],
    )


async def update_super_goal_state(
    session: AsyncSession,
    goal_id: str,
    state: SuperGoalState,
) -> None:
    """Write the membership triple in one statement and commit.

    Safe to retry: the same payload always produces the same row.
    """
    stmt = text(
        "UPDATE goals "
        "SET child_goal_ids = :child_goal_ids, "
        "super_goal_rule = :rule, "
        "is_dynamic_super = :is_dynamic, "
        "updated_at = now() "
        "WHERE id = :goal_id"
    ).bindparams(bindparam("rule", type_=JSONB(none_as_null=True)))
    params = {
        "goal_id": goal_id,
        "child_goal_ids": state.child_goal_ids,
        "rule": state.rule.to_storage() if state.rule is not None else None,
        "is_dynamic": state.is_dynamic,
    }
    try:
        await session.execute(stmt, params)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning(f"Super Goal {goal_id} write rolled back: {exc}")
        raise PersistenceError(f"Could not save Super Goal '{goal_id}'") from exc
