"""Mode conversion and the editor draft.

Nothing here writes to the store: every operation returns a new candidate
state and the caller decides whether to persist it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from app.supergoal.exceptions import InvalidMembershipError
from app.supergoal.models import ChildInfo, ProgressSummary, Rule, SuperGoal, SuperGoalState
from app.supergoal.progress import compute_super_goal_progress
from app.supergoal.resolver import child_info, matched_goals, resolve_static
from app.supergoal.rules import eligible_goals, goal_field


def snapshot_to_static(super_goal: SuperGoal, goals: Sequence[Any]) -> SuperGoal:
    """Freeze the current rule matches into a static id list.

    A static Super Goal has no trusted rule, so it comes back unchanged.
    """
    if not super_goal.is_dynamic:
        return super_goal.model_copy()
    matched = matched_goals(super_goal.id, super_goal.rule, goals)
    return super_goal.model_copy(
        update={
            "is_dynamic": False,
            "rule": None,
            "child_goal_ids": [str(goal_field(g, "id")) for g in matched],
        }
    )


def promote_to_dynamic(super_goal: SuperGoal, rule: Rule | None = None) -> SuperGoal:
    """Switch to rule-driven membership.

    Uses `rule` if given, else the stored rule, else the empty rule which
    matches every eligible goal.
    """
    new_rule = rule or super_goal.rule or Rule()
    return super_goal.model_copy(update={"is_dynamic": True, "rule": new_rule})


@dataclass
class SuperGoalDraft:
    """Uncommitted edit of a Super Goal's membership.

    Mirrors the edit dialog: the mode toggle, the manual selection and the
    rule can all change freely; `preview()` re-evaluates on every edit and
    `to_state()` produces what a save would persist.
    """

    super_goal_id: str
    goals: Sequence[Any]
    is_dynamic: bool = False
    selected_ids: list[str] = field(default_factory=list)
    rule: Rule = field(default_factory=Rule)

    @classmethod
    def from_super_goal(cls, super_goal: SuperGoal, goals: Sequence[Any]) -> SuperGoalDraft:
        return cls(
            super_goal_id=super_goal.id,
            goals=goals,
            is_dynamic=super_goal.is_dynamic,
            selected_ids=list(super_goal.child_goal_ids),
            rule=super_goal.rule or Rule(),
        )

    @classmethod
    def from_state(
        cls, super_goal_id: str, goals: Sequence[Any], state: SuperGoalState
    ) -> SuperGoalDraft:
        return cls(
            super_goal_id=super_goal_id,
            goals=goals,
            is_dynamic=state.is_dynamic,
            selected_ids=list(state.child_goal_ids or []),
            rule=state.rule or Rule(),
        )

    def matched(self) -> list[Any]:
        if not self.is_dynamic:
            return []
        return matched_goals(self.super_goal_id, self.rule, self.goals)

    def children(self) -> list[ChildInfo]:
        if self.is_dynamic:
            return [child_info(g) for g in self.matched()]
        return resolve_static(self.selected_ids, self.goals)

    def preview(self) -> tuple[list[ChildInfo], ProgressSummary]:
        children = self.children()
        return children, compute_super_goal_progress(children)

    def convert_to_static(self) -> SuperGoalDraft:
        if not self.is_dynamic:
            return self
        return replace(
            self,
            is_dynamic=False,
            selected_ids=[str(goal_field(g, "id")) for g in self.matched()],
        )

    def convert_to_dynamic(self) -> SuperGoalDraft:
        return replace(self, is_dynamic=True)

    def to_state(self) -> SuperGoalState:
        """Save payload. Dynamic saves carry the current matches as advisory ids."""
        if self.is_dynamic:
            return SuperGoalState(
                child_goal_ids=[str(goal_field(g, "id")) for g in self.matched()],
                rule=self.rule,
                is_dynamic=True,
            )
        if self.super_goal_id in self.selected_ids:
            raise InvalidMembershipError("A Super Goal cannot include itself")
        eligible = {str(goal_field(g, "id")) for g in eligible_goals(self.goals, self.super_goal_id)}
        rejected = [i for i in self.selected_ids if i not in eligible]
        if rejected:
            raise InvalidMembershipError(f"Not selectable as child goals: {rejected}")
        return SuperGoalState(
            child_goal_ids=list(dict.fromkeys(self.selected_ids)),
            rule=None,
            is_dynamic=False,
        )


def state_for(super_goal: SuperGoal, goals: Sequence[Any]) -> SuperGoalState:
    """Persistence payload for an entity produced by one of the conversions."""
    return SuperGoalDraft.from_super_goal(super_goal, goals).to_state()
