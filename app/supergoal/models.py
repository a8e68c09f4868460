"""Super Goal contract — Pydantic v2 models.

Python attributes are snake_case; the JSON wire format is camelCase, which is
also how rules are stored in ``goals.super_goal_rule``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GoalRef(BaseModel):
    """Read-only view of a goal row. Extra columns are kept, not rejected."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    difficulty: str | None = None
    status: str | None = None
    is_focus: bool | None = None
    goal_type: str = "standard"
    tags: list[str] = Field(default_factory=list)
    total_steps: int | None = None
    validated_steps: int | None = None


class Rule(WireModel):
    """Declarative membership filter. Absent or empty fields do not constrain."""

    difficulties: list[str] | None = None
    tags: list[str] | None = None
    statuses: list[str] | None = None
    focus_only: bool | None = None
    exclude_completed: bool | None = None

    def to_storage(self) -> dict[str, Any]:
        """JSON-ready dict with absent fields dropped (lossless round-trip)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_storage(cls, raw: dict[str, Any] | None) -> Rule | None:
        if raw is None:
            return None
        return cls.model_validate(raw)

    def is_empty(self) -> bool:
        return not (
            self.difficulties
            or self.tags
            or self.statuses
            or self.focus_only
            or self.exclude_completed
        )


class ChildInfo(WireModel):
    id: str
    name: str
    difficulty: str | None = None
    status: str | None = None
    progress: int = 0  # step-based, 0–100
    is_completed: bool = False
    is_missing: bool = False


class ProgressSummary(WireModel):
    completed_count: int = 0
    total_count: int = 0
    percentage: int = 0  # 0–100
    is_fully_completed: bool = False


class SuperGoal(WireModel):
    """Super Goal entity. Exactly one of rule / child_goal_ids is authoritative."""

    id: str
    name: str = ""
    difficulty: str | None = None
    pact_id: str | None = None
    is_dynamic: bool = False
    rule: Rule | None = None
    child_goal_ids: list[str] = Field(default_factory=list)


class SuperGoalState(WireModel):
    """Persistence payload: the membership triple written back to the store."""

    child_goal_ids: list[str] | None = None
    rule: Rule | None = None
    is_dynamic: bool = False


class SuperGoalView(WireModel):
    id: str
    name: str
    difficulty: str | None = None
    is_dynamic: bool
    rule: Rule | None = None
    rule_label: str | None = None
    child_goal_ids: list[str] = Field(default_factory=list)
    children: list[ChildInfo] = Field(default_factory=list)
    progress: ProgressSummary = Field(default_factory=ProgressSummary)


class PromoteRequest(WireModel):
    rule: Rule | None = None
