"""Rule evaluation — pure, stateless, never raises for well-typed input."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from app.supergoal.catalog import is_completed_status, is_super_goal
from app.supergoal.models import Rule

G = TypeVar("G")


def goal_field(goal: Any, name: str) -> Any:
    """Read a field from a DB row mapping or a model instance alike."""
    if isinstance(goal, Mapping):
        return goal.get(name)
    return getattr(goal, name, None)


def matches_rule(goal: Any, rule: Rule) -> bool:
    """True when `goal` passes every populated predicate of `rule`."""
    if rule.difficulties:
        difficulty = goal_field(goal, "difficulty")
        if not difficulty or difficulty not in rule.difficulties:
            return False

    # Tags are OR within the list; the tag check as a whole ANDs with the rest.
    if rule.tags:
        goal_tags = goal_field(goal, "tags") or ()
        if not any(t in goal_tags for t in rule.tags):
            return False

    if rule.statuses:
        status = goal_field(goal, "status")
        if not status or status not in rule.statuses:
            return False

    if rule.focus_only and not goal_field(goal, "is_focus"):
        return False

    if rule.exclude_completed and is_completed_status(goal_field(goal, "status")):
        return False

    return True


def filter_goals_by_rule(goals: Sequence[G], rule: Rule | None) -> list[G]:
    """Stable filter of `goals` by `rule`. A missing or empty rule keeps everything."""
    if rule is None or rule.is_empty():
        return list(goals)
    return [g for g in goals if matches_rule(g, rule)]


def eligible_goals(goals: Sequence[G], super_goal_id: str) -> list[G]:
    """Goals that may become children of `super_goal_id`.

    Drops the Super Goal itself and every other Super Goal; the evaluator
    does not look at goal_type, so callers run this first.
    """
    return [
        g
        for g in goals
        if goal_field(g, "id") != super_goal_id
        and not is_super_goal(goal_field(g, "goal_type"))
    ]
