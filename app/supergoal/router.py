"""Super Goal HTTP router — resolve, preview, save, convert."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import verify_api_key
from app.db import get_session
from app.supergoal import service
from app.supergoal.models import PromoteRequest, SuperGoalState, SuperGoalView

router = APIRouter(prefix="/supergoals", tags=["supergoals"])


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


@router.get("/{goal_id}", response_model=SuperGoalView)
async def get_super_goal(
    goal_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> SuperGoalView:
    super_goal, goals = await service.load(session, goal_id)
    return service.build_view(super_goal, goals)


@router.post("/{goal_id}/preview", response_model=SuperGoalView)
async def preview_super_goal(
    goal_id: str,
    draft: SuperGoalState,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> SuperGoalView:
    """Live preview of an edit. Nothing is written."""
    super_goal, goals = await service.load(session, goal_id)
    return service.preview(super_goal, goals, draft)


# ---------------------------------------------------------------------------
# Write path
# ---------------------------------------------------------------------------


@router.put("/{goal_id}", response_model=SuperGoalView)
async def save_super_goal(
    goal_id: str,
    draft: SuperGoalState,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> SuperGoalView:
    super_goal, goals = await service.load(session, goal_id)
    saved = await service.save_draft(session, super_goal, goals, draft)
    return service.build_view(saved, goals)


@router.post("/{goal_id}/snapshot", response_model=SuperGoalView)
async def snapshot_super_goal(
    goal_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> SuperGoalView:
    """Freeze the current rule matches into a static selection."""
    super_goal, goals = await service.load(session, goal_id)
    saved = await service.snapshot(session, super_goal, goals)
    return service.build_view(saved, goals)


@router.post("/{goal_id}/promote", response_model=SuperGoalView)
async def promote_super_goal(
    goal_id: str,
    body: PromoteRequest | None = Body(default=None),
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
) -> SuperGoalView:
    """Switch to rule-driven membership; without a rule the stored or empty rule is used."""
    super_goal, goals = await service.load(session, goal_id)
    saved = await service.promote(session, super_goal, goals, body.rule if body else None)
    return service.build_view(saved, goals)
