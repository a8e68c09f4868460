"""Progress aggregation helpers — math only, never raises."""

from __future__ import annotations

from collections.abc import Sequence

from app.supergoal.models import ChildInfo, ProgressSummary


def percent_half_up(part: int, whole: int) -> int:
    """Integer percentage of part/whole rounded half-up. 0 when whole is 0.

    Integer arithmetic, so 1/8 → 13 rather than the banker's 12 of round().
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def step_progress(validated_steps: int | None, total_steps: int | None) -> int:
    """Step-based progress (0–100) of a single child goal, for display."""
    total = total_steps or 0
    done = validated_steps or 0
    return min(100, percent_half_up(done, total))


def compute_super_goal_progress(children: Sequence[ChildInfo]) -> ProgressSummary:
    """Aggregate child completion. Missing children count toward nothing.

    A Super Goal without any resolvable child is never fully completed.
    """
    valid = [c for c in children if not c.is_missing]
    total = len(valid)
    completed = sum(1 for c in valid if c.is_completed)
    return ProgressSummary(
        completed_count=completed,
        total_count=total,
        percentage=percent_half_up(completed, total),
        is_fully_completed=total > 0 and completed == total,
    )
