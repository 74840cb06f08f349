"""Records HTTP router — sales, consignments and daily attendances."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.accounts.models import CurrentSeller
from salesdesk.auth import get_current_seller
from salesdesk.config import settings
from salesdesk.db import get_session
from salesdesk.exceptions import NotFound, ValidationError
from salesdesk.pacing.business_calendar import parse_date
from salesdesk.pacing.stores import local_day_bounds_utc
from salesdesk.records import connector
from salesdesk.records.models import (
    AttendanceIn,
    AttendanceOut,
    ConsignmentIn,
    ConsignmentOut,
    SaleIn,
    SaleOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["records"])


# ---------------------------------------------------------------------------
# /api/sales
# ---------------------------------------------------------------------------


@router.post("/sales", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
async def create_sale(
    body: SaleIn,
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> SaleOut:
    row = await connector.insert_sale(session, current.id, body)
    logger.info("Seller %s recorded sale %s (%s)", current.id, row["id"], body.amount)
    return SaleOut(**row)


@router.put("/sales/{sale_id}", response_model=SaleOut)
async def edit_sale(
    sale_id: int,
    body: SaleIn,
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> SaleOut:
    row = await connector.update_sale(session, current.id, sale_id, body)
    if row is None:
        raise NotFound(f"Sale {sale_id} not found")
    return SaleOut(**row)


@router.delete("/sales/{sale_id}")
async def remove_sale(
    sale_id: int,
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> dict[str, bool]:
    deleted = await connector.delete_sale(session, current.id, sale_id)
    if deleted:
        logger.info("Seller %s deleted sale %s", current.id, sale_id)
    return {"ok": True}


@router.get("/sales", response_model=list[SaleOut])
async def list_sales(
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
    from_date: str = Query(..., alias="from", description="Start date (YYYY-MM-DD)"),
    to_date: str = Query(..., alias="to", description="End date (YYYY-MM-DD), inclusive"),
    seller_id: int | None = Query(default=None, description="Managers only: filter by seller"),
) -> list[SaleOut]:
    start = parse_date(from_date)
    end = parse_date(to_date)
    if start > end:
        raise ValidationError("'from' must not be after 'to'")

    # Sellers always see their own sales; managers see everyone unless filtering
    scope = seller_id if current.is_manager else current.id
    range_start, range_end = local_day_bounds_utc(start, end, settings.default_tz)
    rows = await connector.fetch_sales(session, range_start, range_end, scope)
    return [SaleOut(**r) for r in rows]


# ---------------------------------------------------------------------------
# /api/consignments
# ---------------------------------------------------------------------------


@router.post("/consignments", response_model=ConsignmentOut, status_code=status.HTTP_201_CREATED)
async def create_consignment(
    body: ConsignmentIn,
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> ConsignmentOut:
    row = await connector.insert_consignment(session, current.id, body)
    return ConsignmentOut(**row)


@router.get("/consignments", response_model=list[ConsignmentOut])
async def list_consignments(
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> list[ConsignmentOut]:
    rows = await connector.fetch_consignments(session, None if current.is_manager else current.id)
    return [ConsignmentOut(**r) for r in rows]


@router.delete("/consignments/{consignment_id}")
async def remove_consignment(
    consignment_id: int,
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> dict[str, bool]:
    await connector.delete_consignment(session, current.id, consignment_id)
    return {"ok": True}


# ---------------------------------------------------------------------------
# /api/attendances
# ---------------------------------------------------------------------------


@router.post("/attendances", response_model=AttendanceOut)
async def save_attendance(
    body: AttendanceIn,
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> AttendanceOut:
    row = await connector.upsert_attendance(session, current.id, body)
    return AttendanceOut(**row)


@router.get("/attendances/{visit_date}", response_model=AttendanceOut)
async def get_attendance(
    visit_date: str,
    session: AsyncSession = Depends(get_session),
    current: CurrentSeller = Depends(get_current_seller),
) -> AttendanceOut:
    day = parse_date(visit_date)
    row = await connector.fetch_attendance(session, current.id, day)
    if row is None:
        return AttendanceOut(seller_id=current.id, visit_date=day, visits=0)
    return AttendanceOut(**row)
