"""Database connector — waiting todo tasks and the notifications they produce."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.reminders.schedule import due_tasks


async def fetch_waiting_tasks(session: AsyncSession, user_id: str) -> list[dict[str, Any]]:
    """Active waiting tasks with reminders switched on. Empty list when none."""
    query = (
        "SELECT id, name, created_at, reminder_frequency, reminder_last_sent "
        "FROM todo_tasks "
        "WHERE user_id = :user_id "
        "AND status = 'active' "
        "AND task_type = 'waiting' "
        "AND reminder_enabled = true"
    )
    result = await session.execute(text(query), {"user_id": user_id})
    columns = result.keys()
    return [dict(zip(columns, r)) for r in result.fetchall()]


async def send_reminder(
    session: AsyncSession,
    user_id: str,
    task: Mapping[str, Any],
    now: datetime,
) -> bool:
    """Insert the notification and stamp reminder_last_sent. False if the write failed."""
    try:
        await session.execute(
            text(
                "INSERT INTO notifications "
                "(user_id, title, description, category, priority, icon_key, module_key, cta_label, cta_url) "
                "VALUES (:user_id, :title, :description, 'progress', 'informational', "
                "'clock', 'todo', 'View Task', '/todo')"
            ),
            {
                "user_id": user_id,
                "title": "Waiting Task Reminder",
                "description": (
                    f'Your task "{task["name"]}" is still waiting. '
                    "Follow up or mark it complete."
                ),
            },
        )
        await session.execute(
            text("UPDATE todo_tasks SET reminder_last_sent = :now WHERE id = :task_id"),
            {"now": now, "task_id": task["id"]},
        )
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning(f"Reminder for task {task['id']} not sent: {exc}")
        return False
    return True


async def process_reminders(session: AsyncSession, user_id: str, now: datetime) -> dict[str, int]:
    tasks = await fetch_waiting_tasks(session, user_id)
    sent = 0
    for task in due_tasks(tasks, now):
        if await send_reminder(session, user_id, task, now):
            sent += 1
    if sent:
        logger.info(f"Sent {sent} waiting-task reminder(s) for user {user_id}")
    return {"sent": sent}
