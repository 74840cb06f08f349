"""Tests for the ComputedGoal contract and request validation."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from salesdesk.pacing.models import ComputedGoal, GoalSource, OverrideRequest, SellerQuota


def _goal(**overrides) -> ComputedGoal:
    defaults = dict(
        seller_id=1,
        date=date(2024, 3, 10),
        monthly_quota=Decimal("30000"),
        realized_to_date=Decimal("10000"),
        remaining=Decimal("20000"),
        selling_days_remaining=18,
        daily_target=Decimal("20000") / Decimal("18"),
        source=GoalSource.computed,
    )
    defaults.update(overrides)
    return ComputedGoal(**defaults)


class TestComputedGoal:
    def test_json_shape(self):
        data = _goal().model_dump(mode="json")
        assert set(data) == {
            "seller_id",
            "date",
            "monthly_quota",
            "realized_to_date",
            "remaining",
            "selling_days_remaining",
            "daily_target",
            "source",
        }
        assert data["date"] == "2024-03-10"
        assert data["source"] == "computed"

    def test_daily_target_keeps_full_precision(self):
        data = _goal().model_dump(mode="json")
        assert Decimal(data["daily_target"]) == Decimal("20000") / Decimal("18")

    def test_source_values(self):
        for s in ("override", "computed", "fallback"):
            assert _goal(source=s).source == s


class TestOverrideRequest:
    def test_accepts_zero(self):
        assert OverrideRequest(seller_id=1, amount="0").amount == Decimal("0")

    def test_rejects_negative(self):
        with pytest.raises(ValidationError):
            OverrideRequest(seller_id=1, amount="-0.01")


class TestSellerQuota:
    def test_defaults(self):
        seller = SellerQuota(seller_id=1)
        assert seller.monthly_quota is None
        assert seller.default_daily_target == Decimal("0")
        assert seller.active
