"""Accounts HTTP router — login and seller administration."""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.accounts import connector
from salesdesk.accounts.models import (
    CurrentSeller,
    LoginRequest,
    LoginResponse,
    QuotaUpdate,
    SellerCreate,
    SellerOut,
)
from salesdesk.auth import hash_password, new_token, require_manager, token_expiry, verify_password
from salesdesk.config import settings
from salesdesk.db import get_session
from salesdesk.exceptions import AuthenticationError, NotFound

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["accounts"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_session),
) -> LoginResponse:
    row = await connector.fetch_seller_by_name(session, body.name)
    if row is None or not row["active"] or not await verify_password(body.password, row["password_hash"]):
        logger.info("Failed login for %r", body.name)
        raise AuthenticationError("Invalid name or password")

    token = new_token()
    await connector.insert_token(session, token, row["id"], token_expiry())
    logger.info("Seller %s logged in", row["id"])
    return LoginResponse(
        token=token,
        seller=CurrentSeller(id=row["id"], name=row["name"], is_manager=row["is_manager"] is True),
    )


@router.get("/sellers", response_model=list[SellerOut])
async def list_sellers(
    session: AsyncSession = Depends(get_session),
    _: CurrentSeller = Depends(require_manager),
) -> list[SellerOut]:
    return [SellerOut(**row) for row in await connector.fetch_sellers(session)]


@router.post("/sellers", response_model=SellerOut, status_code=status.HTTP_201_CREATED)
async def create_seller(
    body: SellerCreate,
    session: AsyncSession = Depends(get_session),
    manager: CurrentSeller = Depends(require_manager),
) -> SellerOut:
    default_target = body.default_daily_target
    if default_target is None:
        default_target = Decimal(str(settings.default_daily_target))

    row = await connector.insert_seller(
        session,
        name=body.name,
        password_hash=await hash_password(body.password),
        is_manager=body.is_manager,
        monthly_quota=body.monthly_quota,
        default_daily_target=default_target,
    )
    logger.info("Manager %s created seller %s", manager.id, row["id"])
    return SellerOut(**row)


@router.put("/sellers/{seller_id}/quota", response_model=SellerOut)
async def set_seller_quota(
    seller_id: int,
    body: QuotaUpdate,
    session: AsyncSession = Depends(get_session),
    manager: CurrentSeller = Depends(require_manager),
) -> SellerOut:
    row = await connector.update_seller_quota(
        session,
        seller_id,
        monthly_quota=body.monthly_quota,
        default_daily_target=body.default_daily_target,
    )
    if row is None:
        raise NotFound(f"Seller {seller_id} not found")
    logger.info("Manager %s set quota for seller %s", manager.id, seller_id)
    return SellerOut(**row)
