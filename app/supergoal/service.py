"""Super Goal service — load, resolve, convert and commit."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.supergoal import connector
from app.supergoal.catalog import describe_rule, is_super_goal
from app.supergoal.converter import (
    SuperGoalDraft,
    promote_to_dynamic,
    snapshot_to_static,
    state_for,
)
from app.supergoal.exceptions import NotASuperGoalError, SuperGoalNotFoundError
from app.supergoal.models import (
    ChildInfo,
    ProgressSummary,
    Rule,
    SuperGoal,
    SuperGoalState,
    SuperGoalView,
)
from app.supergoal.resolver import resolve_progress


async def load(session: AsyncSession, goal_id: str) -> tuple[SuperGoal, list[dict[str, Any]]]:
    """Fetch a Super Goal and the goal set of its pact."""
    row = await connector.fetch_goal(session, goal_id)
    if row is None:
        raise SuperGoalNotFoundError(goal_id)
    if not is_super_goal(row.get("goal_type")):
        raise NotASuperGoalError(goal_id)
    super_goal = connector.super_goal_from_row(row)
    goals = await connector.fetch_pact_goals(session, super_goal.pact_id) if super_goal.pact_id else []
    return super_goal, goals


def view_of(
    super_goal: SuperGoal,
    children: list[ChildInfo],
    progress: ProgressSummary,
) -> SuperGoalView:
    missing = [c.id for c in children if c.is_missing]
    if missing:
        logger.warning(f"Super Goal {super_goal.id} references missing goals: {missing}")
    return SuperGoalView(
        id=super_goal.id,
        name=super_goal.name,
        difficulty=super_goal.difficulty,
        is_dynamic=super_goal.is_dynamic,
        rule=super_goal.rule if super_goal.is_dynamic else None,
        rule_label=describe_rule(super_goal.rule) if super_goal.is_dynamic else None,
        child_goal_ids=[c.id for c in children],
        children=children,
        progress=progress,
    )


def build_view(super_goal: SuperGoal, goals: Sequence[Any]) -> SuperGoalView:
    children, progress = resolve_progress(super_goal, goals)
    return view_of(super_goal, children, progress)


def preview(super_goal: SuperGoal, goals: Sequence[Any], draft_state: SuperGoalState) -> SuperGoalView:
    """Evaluate an uncommitted edit without writing anything."""
    draft = SuperGoalDraft.from_state(super_goal.id, goals, draft_state)
    candidate = super_goal.model_copy(
        update={
            "is_dynamic": draft.is_dynamic,
            "rule": draft.rule if draft.is_dynamic else None,
            "child_goal_ids": draft.selected_ids,
        }
    )
    children, progress = draft.preview()
    return view_of(candidate, children, progress)


async def commit(
    session: AsyncSession,
    super_goal: SuperGoal,
    state: SuperGoalState,
) -> SuperGoal:
    """Persist `state`. On failure PersistenceError propagates and nothing changes."""
    await connector.update_super_goal_state(session, super_goal.id, state)
    logger.info(
        f"Super Goal {super_goal.id} saved: "
        f"{'dynamic' if state.is_dynamic else 'static'}, "
        f"{len(state.child_goal_ids or [])} child id(s)"
    )
    return super_goal.model_copy(
        update={
            "is_dynamic": state.is_dynamic,
            "rule": state.rule,
            "child_goal_ids": list(state.child_goal_ids or []),
        }
    )


async def save_draft(
    session: AsyncSession,
    super_goal: SuperGoal,
    goals: Sequence[Any],
    draft_state: SuperGoalState,
) -> SuperGoal:
    draft = SuperGoalDraft.from_state(super_goal.id, goals, draft_state)
    return await commit(session, super_goal, draft.to_state())


async def snapshot(session: AsyncSession, super_goal: SuperGoal, goals: Sequence[Any]) -> SuperGoal:
    if not super_goal.is_dynamic:
        # Already static: the stored selection stays as it is.
        return super_goal
    candidate = snapshot_to_static(super_goal, goals)
    return await commit(session, super_goal, state_for(candidate, goals))


async def promote(
    session: AsyncSession,
    super_goal: SuperGoal,
    goals: Sequence[Any],
    rule: Rule | None = None,
) -> SuperGoal:
    candidate = promote_to_dynamic(super_goal, rule)
    return await commit(session, super_goal, state_for(candidate, goals))
