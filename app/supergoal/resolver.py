"""Read path — turn a Super Goal plus the live goal set into child descriptors.

Recomputed on every call; callers that need memoisation key it on the goal
set they pass in.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.supergoal.catalog import is_completed_status, is_super_goal
from app.supergoal.models import ChildInfo, ProgressSummary, Rule, SuperGoal
from app.supergoal.progress import compute_super_goal_progress, step_progress
from app.supergoal.rules import eligible_goals, filter_goals_by_rule, goal_field

MISSING_GOAL_NAME = "Missing Goal"


def missing_child(goal_id: str) -> ChildInfo:
    return ChildInfo(
        id=goal_id,
        name=MISSING_GOAL_NAME,
        difficulty=None,
        status="not_started",
        progress=0,
        is_completed=False,
        is_missing=True,
    )


def child_info(goal: Any) -> ChildInfo:
    status = goal_field(goal, "status")
    return ChildInfo(
        id=str(goal_field(goal, "id")),
        name=goal_field(goal, "name") or "",
        difficulty=goal_field(goal, "difficulty"),
        status=status,
        progress=step_progress(
            goal_field(goal, "validated_steps"), goal_field(goal, "total_steps")
        ),
        is_completed=is_completed_status(status),
        is_missing=False,
    )


def matched_goals(super_goal_id: str, rule: Rule | None, goals: Sequence[Any]) -> list[Any]:
    """Current dynamic membership of `super_goal_id` under `rule`."""
    return filter_goals_by_rule(eligible_goals(goals, super_goal_id), rule)


def resolve_static(child_goal_ids: Sequence[str], goals: Sequence[Any]) -> list[ChildInfo]:
    """Dereference a static id list. Deleted or retyped-to-super ids come back missing."""
    by_id = {str(goal_field(g, "id")): g for g in goals}
    children: list[ChildInfo] = []
    for goal_id in child_goal_ids:
        goal = by_id.get(goal_id)
        if goal is None or is_super_goal(goal_field(goal, "goal_type")):
            children.append(missing_child(goal_id))
        else:
            children.append(child_info(goal))
    return children


def resolve_children(super_goal: SuperGoal, goals: Sequence[Any]) -> list[ChildInfo]:
    if super_goal.is_dynamic:
        # The id list is advisory in dynamic mode and never consulted.
        return [child_info(g) for g in matched_goals(super_goal.id, super_goal.rule, goals)]
    # The Super Goal itself is a super goal, so a self-reference resolves as missing.
    return resolve_static(super_goal.child_goal_ids, goals)


def resolve_progress(
    super_goal: SuperGoal, goals: Sequence[Any]
) -> tuple[list[ChildInfo], ProgressSummary]:
    children = resolve_children(super_goal, goals)
    return children, compute_super_goal_progress(children)
