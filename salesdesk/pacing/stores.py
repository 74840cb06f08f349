"""Pacing collaborators — the narrow interfaces GoalService depends on.

Each interface is a Protocol; the Sql* classes implement them against
Postgres through an AsyncSession. Driver failures surface as DependencyError.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Protocol
from zoneinfo import ZoneInfo

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.db import dependency_errors, row_to_dict
from salesdesk.pacing.models import SellerQuota

logger = logging.getLogger(__name__)


class SellerDirectory(Protocol):
    async def get_seller(self, seller_id: int) -> SellerQuota | None: ...


class SalesAggregate(Protocol):
    async def sum_sales_amount(
        self, seller_id: int, from_inclusive: date, to_inclusive: date
    ) -> Decimal: ...


class OverrideStore(Protocol):
    async def get_override(self, seller_id: int, day: date) -> Decimal | None: ...

    async def upsert_override(self, seller_id: int, day: date, amount: Decimal) -> None: ...


def local_day_bounds_utc(
    from_inclusive: date, to_inclusive: date, tz_name: str
) -> tuple[datetime, datetime]:
    """UTC instants covering whole local days [from_inclusive, to_inclusive]."""
    tz = ZoneInfo(tz_name)
    start = datetime.combine(from_inclusive, time.min, tzinfo=tz)
    end = datetime.combine(to_inclusive + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


class SqlSellerDirectory:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_seller(self, seller_id: int) -> SellerQuota | None:
        query = (
            "SELECT id AS seller_id, monthly_quota, default_daily_target, active "
            "FROM sellers WHERE id = :seller_id"
        )
        with dependency_errors("seller lookup"):
            result = await self._session.execute(text(query), {"seller_id": seller_id})
            row = result.fetchone()
        if row is None:
            return None
        data = row_to_dict(result.keys(), row)
        if data["default_daily_target"] is None:
            data["default_daily_target"] = Decimal("0")
        return SellerQuota(**data)


class SqlSalesAggregate:
    def __init__(self, session: AsyncSession, tz_name: str):
        self._session = session
        self._tz_name = tz_name

    async def sum_sales_amount(self, seller_id: int, from_inclusive: date, to_inclusive: date) -> Decimal:
        """Sum of sale amounts whose local sale day falls in the closed range.

        Returns Decimal 0 when the seller has no sales in range.
        """
        if from_inclusive > to_inclusive:
            return Decimal("0")
        start, end = local_day_bounds_utc(from_inclusive, to_inclusive, self._tz_name)
        query = (
            "SELECT COALESCE(SUM(amount), 0) AS total "
            "FROM sales "
            "WHERE seller_id = :seller_id AND sold_at >= :start AND sold_at < :end"
        )
        with dependency_errors("sales aggregate"):
            result = await self._session.execute(
                text(query), {"seller_id": seller_id, "start": start, "end": end}
            )
            total = result.scalar()
        return Decimal(total or 0)


class SqlOverrideStore:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_override(self, seller_id: int, day: date) -> Decimal | None:
        query = "SELECT amount FROM goal_overrides WHERE seller_id = :seller_id AND goal_date = :day"
        with dependency_errors("override lookup"):
            result = await self._session.execute(text(query), {"seller_id": seller_id, "day": day})
            amount = result.scalar()
        return Decimal(amount) if amount is not None else None

    async def upsert_override(self, seller_id: int, day: date, amount: Decimal) -> None:
        # Single statement: the unique (seller_id, goal_date) key serializes concurrent writers.
        query = (
            "INSERT INTO goal_overrides (seller_id, goal_date, amount) "
            "VALUES (:seller_id, :day, :amount) "
            "ON CONFLICT (seller_id, goal_date) DO UPDATE SET amount = EXCLUDED.amount"
        )
        with dependency_errors("override upsert"):
            await self._session.execute(
                text(query), {"seller_id": seller_id, "day": day, "amount": amount}
            )
            await self._session.commit()
        logger.info("Override stored for seller %s on %s: %s", seller_id, day, amount)
