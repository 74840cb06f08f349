"""Pacing HTTP router — daily goals and manager overrides."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.accounts.models import CurrentSeller
from salesdesk.auth import get_current_seller, require_manager, resolve_target_seller
from salesdesk.config import settings
from salesdesk.db import get_session
from salesdesk.pacing.business_calendar import parse_date
from salesdesk.pacing.models import ComputedGoal, OverrideRequest, OverrideResponse
from salesdesk.pacing.service import GoalService
from salesdesk.pacing.stores import SqlOverrideStore, SqlSalesAggregate, SqlSellerDirectory

router = APIRouter(prefix="/api", tags=["goals"])


def get_goal_service(session: AsyncSession = Depends(get_session)) -> GoalService:
    return GoalService(
        sellers=SqlSellerDirectory(session),
        sales=SqlSalesAggregate(session, settings.default_tz),
        overrides=SqlOverrideStore(session),
    )


def _goal_date(value: str) -> date:
    if value == "today":
        return datetime.now(ZoneInfo(settings.default_tz)).date()
    return parse_date(value)


@router.get("/goals/{goal_date}", response_model=ComputedGoal)
async def get_daily_goal(
    goal_date: str,
    service: GoalService = Depends(get_goal_service),
    current: CurrentSeller = Depends(get_current_seller),
    seller_id: int | None = Query(default=None, description="Managers only: another seller's goal"),
) -> ComputedGoal:
    """Daily goal for a date (YYYY-MM-DD or "today")."""
    target = resolve_target_seller(current, seller_id)
    return await service.get_daily_goal(target, _goal_date(goal_date))


@router.put("/goals/{goal_date}", response_model=OverrideResponse)
async def set_goal_override(
    goal_date: str,
    body: OverrideRequest,
    service: GoalService = Depends(get_goal_service),
    _: CurrentSeller = Depends(require_manager),
) -> OverrideResponse:
    day = _goal_date(goal_date)
    await service.set_override(body.seller_id, day, body.amount)
    return OverrideResponse(seller_id=body.seller_id, date=day, amount=body.amount)
