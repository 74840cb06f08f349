"""Pacing value objects — Pydantic v2 models."""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class GoalSource(str, Enum):
    override = "override"
    computed = "computed"
    fallback = "fallback"


class SellerQuota(BaseModel):
    """The slice of a seller the pacing engine reads."""

    seller_id: int
    monthly_quota: Decimal | None = None  # None or 0 → pacing disabled
    default_daily_target: Decimal = Decimal("0")
    active: bool = True


class ComputedGoal(BaseModel):
    """Derived daily goal snapshot — recomputed on every request, never stored."""

    seller_id: int
    date: date
    monthly_quota: Decimal
    realized_to_date: Decimal
    remaining: Decimal
    selling_days_remaining: int
    daily_target: Decimal
    source: GoalSource


class OverrideRequest(BaseModel):
    seller_id: int
    amount: Decimal = Field(..., ge=0)


class OverrideResponse(BaseModel):
    seller_id: int
    date: date
    amount: Decimal
