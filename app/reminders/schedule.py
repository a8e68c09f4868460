"""Waiting-task reminder scheduling — pure helpers, never raises."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from app.config import settings


def _as_utc(value: datetime | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_between(earlier: datetime | str, now: datetime) -> int:
    """Whole days elapsed from `earlier` to `now` (floored)."""
    delta = _as_utc(now) - _as_utc(earlier)
    return int(delta.total_seconds() // 86400)


def is_reminder_due(
    task: Mapping[str, Any],
    now: datetime,
    frequency_days: Mapping[str, int] | None = None,
) -> bool:
    """True when a reminder should go out for `task` at `now`.

    Counts from reminder_last_sent, or from created_at if nothing was sent
    yet. Tasks without a known frequency are never due.
    """
    frequencies = settings.reminder_frequency_days if frequency_days is None else frequency_days
    period = frequencies.get(task.get("reminder_frequency") or "")
    if not period:
        return False
    anchor = task.get("reminder_last_sent") or task.get("created_at")
    if anchor is None:
        return False
    return days_between(anchor, now) >= period


def due_tasks(
    tasks: Sequence[Mapping[str, Any]],
    now: datetime,
    frequency_days: Mapping[str, int] | None = None,
) -> list[Mapping[str, Any]]:
    return [t for t in tasks if is_reminder_due(t, now, frequency_days)]
