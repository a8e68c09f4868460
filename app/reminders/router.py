"""Reminder processing endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import verify_api_key
from app.db import get_session
from app.reminders import connector

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.post("/{user_id}/process")
async def process_user_reminders(
    user_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> dict[str, int]:
    return await connector.process_reminders(session, user_id, datetime.now(timezone.utc))
