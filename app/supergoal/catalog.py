"""Goal vocabulary — difficulties, statuses, completion predicate. Config only.

Difficulty is a tagged variant: either a fixed tier or ``custom``. A custom
difficulty's display name and colour live on the user profile and never reach
the engine; matching only ever compares the discriminant string.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.supergoal.models import Rule

SUPER_GOAL_TYPE = "super"
FULLY_COMPLETED = "fully_completed"

# "validated" is a distinct status and does not count as done anywhere in the engine.
COMPLETED_STATUSES: frozenset[str] = frozenset({FULLY_COMPLETED})


class DifficultyTier(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"
    extreme = "extreme"
    impossible = "impossible"


@dataclass(frozen=True, slots=True)
class CustomDifficulty:
    key: str = "custom"


Difficulty = DifficultyTier | CustomDifficulty


@dataclass(frozen=True, slots=True)
class StatusDefinition:
    key: str
    label: str


STATUSES: dict[str, StatusDefinition] = {
    "not_started": StatusDefinition("not_started", "Not Started"),
    "in_progress": StatusDefinition("in_progress", "In Progress"),
    "validated": StatusDefinition("validated", "Validated"),
    "fully_completed": StatusDefinition("fully_completed", "Completed"),
    "paused": StatusDefinition("paused", "Paused"),
}


def parse_difficulty(value: str | None) -> Difficulty | None:
    """Map a stored difficulty string onto the tagged variant. Unknown → None."""
    if value is None:
        return None
    if value == "custom":
        return CustomDifficulty()
    try:
        return DifficultyTier(value)
    except ValueError:
        return None


def difficulty_key(difficulty: Difficulty) -> str:
    if isinstance(difficulty, CustomDifficulty):
        return difficulty.key
    return difficulty.value


def is_completed_status(status: str | None) -> bool:
    """Single completion predicate shared by the evaluator and the resolver."""
    return status in COMPLETED_STATUSES


def is_super_goal(goal_type: str | None) -> bool:
    return goal_type == SUPER_GOAL_TYPE


def difficulty_label(value: str) -> str:
    parsed = parse_difficulty(value)
    if isinstance(parsed, CustomDifficulty):
        return "Custom"
    key = difficulty_key(parsed) if parsed is not None else value
    return key.replace("_", " ").capitalize()


def status_label(value: str) -> str:
    status = STATUSES.get(value)
    if status is not None:
        return status.label
    return value.replace("_", " ").capitalize()


def describe_rule(rule: Rule | None) -> str | None:
    """Short label for a dynamic rule, e.g. "Easy, Hard · Focus · Active"."""
    if rule is None:
        return None
    parts: list[str] = []
    if rule.difficulties:
        parts.append(", ".join(difficulty_label(d) for d in rule.difficulties))
    if rule.tags:
        parts.append(", ".join(f"#{t}" for t in rule.tags))
    if rule.statuses:
        parts.append(", ".join(status_label(s) for s in rule.statuses))
    if rule.focus_only:
        parts.append("Focus")
    if rule.exclude_completed:
        parts.append("Active")
    return " · ".join(parts) if parts else "All goals"
