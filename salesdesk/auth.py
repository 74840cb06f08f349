"""Bearer-token authentication and role checks for /api endpoints."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone

import bcrypt
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from salesdesk.accounts import connector
from salesdesk.accounts.models import CurrentSeller
from salesdesk.config import settings
from salesdesk.db import get_session
from salesdesk.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


def _hash_sync(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _check_sync(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


async def hash_password(password: str) -> str:
    """bcrypt hash, computed in the threadpool so the event loop keeps serving."""
    return await run_in_threadpool(_hash_sync, password)


async def verify_password(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(_check_sync, password, password_hash)


def new_token() -> str:
    return secrets.token_urlsafe(32)


def token_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(hours=settings.token_ttl_hours)


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing bearer token")
    token = authorization[7:].strip()
    if not token:
        raise AuthenticationError("Missing bearer token")
    return token


async def get_current_seller(
    authorization: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> CurrentSeller:
    """Resolve the caller from the bearer token or raise 401."""
    token = bearer_token(authorization)
    row = await connector.fetch_seller_for_token(session, token, datetime.now(timezone.utc))
    if row is None:
        raise AuthenticationError("Invalid or expired token")
    return CurrentSeller(id=row["id"], name=row["name"], is_manager=row["is_manager"] is True)


async def require_manager(
    current: CurrentSeller = Depends(get_current_seller),
) -> CurrentSeller:
    if not current.is_manager:
        logger.info("Seller %s denied manager-only action", current.id)
        raise AuthorizationError("Only a manager can do this")
    return current


def resolve_target_seller(current: CurrentSeller, seller_id: int | None) -> int:
    """Seller whose data the caller may read: self, or anyone for managers."""
    if seller_id is None or seller_id == current.id:
        return current.id
    if not current.is_manager:
        raise AuthorizationError("Sellers can only view their own data")
    return seller_id
