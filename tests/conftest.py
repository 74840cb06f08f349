"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from salesdesk.accounts.models import CurrentSeller
from salesdesk.auth import get_current_seller
from salesdesk.db import get_session
from salesdesk.main import app
from salesdesk.pacing.models import SellerQuota
from salesdesk.pacing.router import get_goal_service
from salesdesk.pacing.service import GoalService


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in connector and endpoint tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None, error: Exception | None = None):
        self._rows = rows or []
        self._error = error
        self.executed: list[tuple[str, dict | None]] = []
        self.commits = 0

    async def execute(self, stmt, params=None):
        self.executed.append((str(stmt), params))
        if self._error is not None:
            raise self._error
        return FakeResult(self._rows)

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None

    def scalar(self):
        row = self.fetchone()
        return row[0] if row else None


# ---------------------------------------------------------------------------
# In-memory pacing collaborators
# ---------------------------------------------------------------------------

class FakeSellerDirectory:
    def __init__(self, sellers: dict[int, SellerQuota] | None = None):
        self.sellers = sellers or {}

    async def get_seller(self, seller_id: int) -> SellerQuota | None:
        return self.sellers.get(seller_id)


class FakeSalesAggregate:
    """Sales kept as (seller_id, day, amount); sums over the closed range."""

    def __init__(self, sales: list[tuple[int, date, Decimal]] | None = None):
        self.sales = sales or []
        self.calls: list[tuple[int, date, date]] = []

    async def sum_sales_amount(self, seller_id: int, from_inclusive: date, to_inclusive: date) -> Decimal:
        self.calls.append((seller_id, from_inclusive, to_inclusive))
        return sum(
            (amount for sid, day, amount in self.sales if sid == seller_id and from_inclusive <= day <= to_inclusive),
            Decimal("0"),
        )


class FakeOverrideStore:
    def __init__(self):
        self.rows: dict[tuple[int, date], Decimal] = {}
        self.writes = 0

    async def get_override(self, seller_id: int, day: date) -> Decimal | None:
        return self.rows.get((seller_id, day))

    async def upsert_override(self, seller_id: int, day: date, amount: Decimal) -> None:
        self.writes += 1
        self.rows[(seller_id, day)] = amount


def make_seller(
    seller_id: int = 1,
    monthly_quota: str | None = "30000",
    default_daily_target: str = "500",
    active: bool = True,
) -> SellerQuota:
    return SellerQuota(
        seller_id=seller_id,
        monthly_quota=Decimal(monthly_quota) if monthly_quota is not None else None,
        default_daily_target=Decimal(default_daily_target),
        active=active,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def seller_directory():
    return FakeSellerDirectory({1: make_seller(1), 2: make_seller(2, monthly_quota=None)})


@pytest.fixture()
def sales_aggregate():
    return FakeSalesAggregate()


@pytest.fixture()
def override_store():
    return FakeOverrideStore()


@pytest.fixture()
def goal_service(seller_directory, sales_aggregate, override_store):
    return GoalService(seller_directory, sales_aggregate, override_store)


@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _rows in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def current_seller():
    return CurrentSeller(id=1, name="Ana", is_manager=False)


@pytest.fixture()
def override_deps(fake_session, goal_service, current_seller):
    """Override FastAPI dependencies so no real DB or token is needed."""
    async def _session():
        yield fake_session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_goal_service] = lambda: goal_service
    app.dependency_overrides[get_current_seller] = lambda: current_seller
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_deps):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
