"""Goal resolver — turns a monthly quota into today's pacing target.

The unmet remainder of the quota is spread evenly over the selling days left
in the month, today included. Sellers who fall behind see the daily target
rise; sellers who get ahead see it drop toward zero.

Pure and synchronous: all inputs are already loaded by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from salesdesk.exceptions import ValidationError
from salesdesk.pacing.business_calendar import count_selling_days, last_day_of_month
from salesdesk.pacing.models import GoalSource

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    daily_target: Decimal
    remaining: Decimal
    selling_days_remaining: int
    source: GoalSource


def _require_non_negative(name: str, value: Decimal) -> None:
    if value < 0:
        raise ValidationError(f"{name} must be >= 0, got {value}")


def resolve_daily_target(
    monthly_quota: Decimal | None,
    default_daily_target: Decimal,
    computation_date: date,
    realized_to_date: Decimal,
) -> ResolvedTarget:
    """Compute the daily target for ``computation_date``.

    - quota unset or 0: ``default_daily_target`` unchanged (source "fallback")
    - quota already met: 0
    - no selling day left in the month (e.g. only a Sunday remains): 0
    - otherwise: remaining / selling days left, unrounded
    """
    quota = Decimal(monthly_quota) if monthly_quota is not None else ZERO
    default_target = Decimal(default_daily_target)
    realized = Decimal(realized_to_date)

    _require_non_negative("monthly_quota", quota)
    _require_non_negative("default_daily_target", default_target)
    _require_non_negative("realized_to_date", realized)

    remaining = max(quota - realized, ZERO)
    days_left = count_selling_days(computation_date, last_day_of_month(computation_date))

    if quota == 0:
        return ResolvedTarget(default_target, remaining, days_left, GoalSource.fallback)

    if remaining == 0 or days_left <= 0:
        return ResolvedTarget(ZERO, remaining, days_left, GoalSource.computed)

    return ResolvedTarget(remaining / days_left, remaining, days_left, GoalSource.computed)
