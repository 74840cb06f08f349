"""GoalService — orchestrates the resolver and its collaborators."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from salesdesk.exceptions import NotFound, ValidationError
from salesdesk.pacing.business_calendar import first_day_of_month
from salesdesk.pacing.models import ComputedGoal, GoalSource, SellerQuota
from salesdesk.pacing.resolver import resolve_daily_target
from salesdesk.pacing.stores import OverrideStore, SalesAggregate, SellerDirectory

logger = logging.getLogger(__name__)


class GoalService:
    def __init__(
        self,
        sellers: SellerDirectory,
        sales: SalesAggregate,
        overrides: OverrideStore,
    ):
        self._sellers = sellers
        self._sales = sales
        self._overrides = overrides

    async def _load_seller(self, seller_id: int) -> SellerQuota:
        seller = await self._sellers.get_seller(seller_id)
        if seller is None or not seller.active:
            raise NotFound(f"Seller {seller_id} not found")
        return seller

    async def get_daily_goal(self, seller_id: int, day: date) -> ComputedGoal:
        """Daily goal for ``seller_id`` on ``day``.

        Realized sales run from the first of the month through ``day`` inclusive.
        An override for the exact (seller, day) replaces the daily target only;
        quota, realized and remaining still come from the computed path.
        """
        seller = await self._load_seller(seller_id)
        realized = await self._sales.sum_sales_amount(seller_id, first_day_of_month(day), day)
        resolved = resolve_daily_target(
            seller.monthly_quota,
            seller.default_daily_target,
            day,
            realized,
        )

        daily_target = resolved.daily_target
        source = resolved.source
        override = await self._overrides.get_override(seller_id, day)
        if override is not None:
            daily_target = override
            source = GoalSource.override

        logger.debug(
            "Goal for seller %s on %s: %s (%s, realized=%s)",
            seller_id, day, daily_target, source.value, realized,
        )
        return ComputedGoal(
            seller_id=seller_id,
            date=day,
            monthly_quota=seller.monthly_quota or Decimal("0"),
            realized_to_date=realized,
            remaining=resolved.remaining,
            selling_days_remaining=resolved.selling_days_remaining,
            daily_target=daily_target,
            source=source,
        )

    async def set_override(self, seller_id: int, day: date, amount: Decimal) -> None:
        """Insert or replace the override for (seller_id, day). Idempotent."""
        amount = Decimal(amount)
        if not amount.is_finite() or amount < 0:
            raise ValidationError(f"Override amount must be a finite number >= 0, got {amount}")
        await self._load_seller(seller_id)
        await self._overrides.upsert_override(seller_id, day, amount)
