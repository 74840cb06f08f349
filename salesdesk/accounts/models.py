"""Account request/response models."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class CurrentSeller(BaseModel):
    """The authenticated caller, resolved from a bearer token."""

    id: int
    name: str
    is_manager: bool = False


class LoginRequest(BaseModel):
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    seller: CurrentSeller


class SellerOut(BaseModel):
    id: int
    name: str
    is_manager: bool
    active: bool
    monthly_quota: Decimal | None = None
    default_daily_target: Decimal | None = None


class SellerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    is_manager: bool = False
    monthly_quota: Decimal | None = Field(default=None, ge=0)
    default_daily_target: Decimal | None = Field(default=None, ge=0)


class QuotaUpdate(BaseModel):
    monthly_quota: Decimal | None = Field(default=None, ge=0)
    default_daily_target: Decimal = Field(..., ge=0)
