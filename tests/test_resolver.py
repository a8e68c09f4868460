"""Tests for Super Goal resolution (read path)."""

from __future__ import annotations

from app.supergoal.models import Rule, SuperGoal
from app.supergoal.resolver import MISSING_GOAL_NAME, resolve_children, resolve_progress
from tests.conftest import make_goal


def _goal_set() -> list[dict]:
    return [
        make_goal("sg", goal_type="super"),
        make_goal("other-sg", goal_type="super", difficulty="easy"),
        make_goal("a", difficulty="easy", status="fully_completed", total_steps=4, validated_steps=4),
        make_goal("b", difficulty="easy", status="in_progress", total_steps=4, validated_steps=1),
        make_goal("c", difficulty="hard", status="validated"),
    ]


class TestDynamicResolution:
    def test_applies_rule_to_eligible_goals(self):
        sg = SuperGoal(id="sg", is_dynamic=True, rule=Rule(difficulties=["easy"]))
        children = resolve_children(sg, _goal_set())
        assert [c.id for c in children] == ["a", "b"]

    def test_never_includes_self_or_other_super_goals(self):
        sg = SuperGoal(id="sg", is_dynamic=True, rule=Rule())
        ids = [c.id for c in resolve_children(sg, _goal_set())]
        assert "sg" not in ids
        assert "other-sg" not in ids

    def test_id_list_is_ignored(self):
        sg = SuperGoal(id="sg", is_dynamic=True, rule=Rule(difficulties=["hard"]), child_goal_ids=["a", "b"])
        assert [c.id for c in resolve_children(sg, _goal_set())] == ["c"]

    def test_missing_rule_matches_everything_eligible(self):
        sg = SuperGoal(id="sg", is_dynamic=True, rule=None)
        assert [c.id for c in resolve_children(sg, _goal_set())] == ["a", "b", "c"]

    def test_reevaluates_when_goal_set_changes(self):
        sg = SuperGoal(id="sg", is_dynamic=True, rule=Rule(difficulties=["easy"]))
        goals = _goal_set() + [make_goal("d", difficulty="easy")]
        assert [c.id for c in resolve_children(sg, goals)] == ["a", "b", "d"]


class TestStaticResolution:
    def test_dereferences_ids_in_order(self):
        sg = SuperGoal(id="sg", child_goal_ids=["c", "a"])
        children = resolve_children(sg, _goal_set())
        assert [c.id for c in children] == ["c", "a"]
        assert children[1].is_completed is True
        assert children[1].progress == 100

    def test_validated_child_is_not_completed(self):
        sg = SuperGoal(id="sg", child_goal_ids=["c"])
        assert resolve_children(sg, _goal_set())[0].is_completed is False

    def test_rule_is_ignored(self):
        sg = SuperGoal(id="sg", is_dynamic=False, rule=Rule(difficulties=["hard"]), child_goal_ids=["a"])
        assert [c.id for c in resolve_children(sg, _goal_set())] == ["a"]

    def test_deleted_child_reported_missing(self):
        sg = SuperGoal(id="sg", child_goal_ids=["a", "x"])
        children, progress = resolve_progress(sg, _goal_set())
        missing = children[1]
        assert missing.id == "x"
        assert missing.is_missing is True
        assert missing.name == MISSING_GOAL_NAME
        assert progress.total_count == 1
        assert progress.completed_count == 1
        assert progress.is_fully_completed is True

    def test_child_retyped_to_super_reported_missing(self):
        sg = SuperGoal(id="sg", child_goal_ids=["other-sg", "b"])
        children, progress = resolve_progress(sg, _goal_set())
        assert children[0].is_missing is True
        assert progress.total_count == 1

    def test_self_reference_reported_missing(self):
        sg = SuperGoal(id="sg", child_goal_ids=["sg"])
        children = resolve_children(sg, _goal_set())
        assert children[0].is_missing is True

    def test_insensitive_to_unrelated_changes(self):
        sg = SuperGoal(id="sg", child_goal_ids=["a"])
        goals = _goal_set() + [make_goal("d", difficulty="easy")]
        assert [c.id for c in resolve_children(sg, goals)] == ["a"]

    def test_step_progress_on_child(self):
        sg = SuperGoal(id="sg", child_goal_ids=["b"])
        assert resolve_children(sg, _goal_set())[0].progress == 25
