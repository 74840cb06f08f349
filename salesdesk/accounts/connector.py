"""Seller and session-token persistence (tables: sellers, auth_tokens)."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.db import dependency_errors, row_to_dict
from salesdesk.exceptions import Conflict

_SELLER_COLUMNS = "id, name, is_manager, active, monthly_quota, default_daily_target"


async def fetch_seller_by_name(session: AsyncSession, name: str) -> dict[str, Any] | None:
    """Seller row including password_hash, or None."""
    query = f"SELECT {_SELLER_COLUMNS}, password_hash FROM sellers WHERE name = :name"
    with dependency_errors("seller lookup"):
        result = await session.execute(text(query), {"name": name})
        row = result.fetchone()
    if row is None:
        return None
    return row_to_dict(result.keys(), row)


async def fetch_sellers(session: AsyncSession) -> list[dict[str, Any]]:
    query = f"SELECT {_SELLER_COLUMNS} FROM sellers ORDER BY name ASC"
    with dependency_errors("seller listing"):
        result = await session.execute(text(query))
        columns = result.keys()
        return [row_to_dict(columns, r) for r in result.fetchall()]


async def insert_seller(
    session: AsyncSession,
    *,
    name: str,
    password_hash: str,
    is_manager: bool,
    monthly_quota: Decimal | None,
    default_daily_target: Decimal,
) -> dict[str, Any]:
    """Insert a seller. Raises Conflict when the name is taken."""
    query = (
        "INSERT INTO sellers (name, password_hash, is_manager, monthly_quota, default_daily_target) "
        "VALUES (:name, :password_hash, :is_manager, :monthly_quota, :default_daily_target) "
        f"RETURNING {_SELLER_COLUMNS}"
    )
    params = {
        "name": name,
        "password_hash": password_hash,
        "is_manager": is_manager,
        "monthly_quota": monthly_quota,
        "default_daily_target": default_daily_target,
    }
    with dependency_errors("seller insert"):
        try:
            result = await session.execute(text(query), params)
            row = result.fetchone()
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise Conflict(f"A seller named {name!r} already exists") from None
    return row_to_dict(result.keys(), row)


async def update_seller_quota(
    session: AsyncSession,
    seller_id: int,
    *,
    monthly_quota: Decimal | None,
    default_daily_target: Decimal,
) -> dict[str, Any] | None:
    query = (
        "UPDATE sellers SET monthly_quota = :monthly_quota, default_daily_target = :default_daily_target "
        f"WHERE id = :seller_id RETURNING {_SELLER_COLUMNS}"
    )
    params = {
        "seller_id": seller_id,
        "monthly_quota": monthly_quota,
        "default_daily_target": default_daily_target,
    }
    with dependency_errors("quota update"):
        result = await session.execute(text(query), params)
        row = result.fetchone()
        await session.commit()
    if row is None:
        return None
    return row_to_dict(result.keys(), row)


async def insert_token(session: AsyncSession, token: str, seller_id: int, expires_at: datetime) -> None:
    """Store a new token and drop the seller's expired ones in the same commit."""
    purge = "DELETE FROM auth_tokens WHERE seller_id = :seller_id AND expires_at <= :now"
    query = "INSERT INTO auth_tokens (token, seller_id, expires_at) VALUES (:token, :seller_id, :expires_at)"
    with dependency_errors("token insert"):
        await session.execute(text(purge), {"seller_id": seller_id, "now": datetime.now(timezone.utc)})
        await session.execute(text(query), {"token": token, "seller_id": seller_id, "expires_at": expires_at})
        await session.commit()



async def fetch_seller_for_token(session: AsyncSession, token: str, now: datetime) -> dict[str, Any] | None:
    """Active seller owning an unexpired token, or None."""
    query = (
        "SELECT s.id, s.name, s.is_manager "
        "FROM auth_tokens t JOIN sellers s ON s.id = t.seller_id "
        "WHERE t.token = :token AND t.expires_at > :now AND s.active"
    )
    with dependency_errors("token lookup"):
        result = await session.execute(text(query), {"token": token, "now": now})
        row = result.fetchone()
    if row is None:
        return None
    return row_to_dict(result.keys(), row)
