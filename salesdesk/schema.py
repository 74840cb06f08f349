"""Table bootstrap — idempotent DDL run once at startup.

Tables:
  sellers         one row per seller/manager, quota configuration
  auth_tokens     opaque bearer tokens issued at login
  sales           individual sales, sold_at is an instant (TIMESTAMPTZ)
  consignments    pieces taken home on approval
  attendances     client visits per (seller, visit_date), upserted
  goal_overrides  manual daily targets per (seller, goal_date), upserted
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from salesdesk.accounts import connector
from salesdesk.auth import hash_password
from salesdesk.config import settings
from salesdesk.db import build_sessionmaker

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS sellers (
        id SERIAL PRIMARY KEY,
        name VARCHAR(100) UNIQUE NOT NULL,
        password_hash VARCHAR(255) NOT NULL,
        is_manager BOOLEAN NOT NULL DEFAULT false,
        active BOOLEAN NOT NULL DEFAULT true,
        monthly_quota NUMERIC(12,2) CHECK (monthly_quota >= 0),
        default_daily_target NUMERIC(12,2) NOT NULL DEFAULT 0 CHECK (default_daily_target >= 0),
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS auth_tokens (
        token VARCHAR(64) PRIMARY KEY,
        seller_id INTEGER NOT NULL REFERENCES sellers(id) ON DELETE CASCADE,
        expires_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sales (
        id SERIAL PRIMARY KEY,
        seller_id INTEGER NOT NULL REFERENCES sellers(id),
        amount NUMERIC(12,2) NOT NULL CHECK (amount >= 0),
        piece_count INTEGER,
        payment_method VARCHAR(50) NOT NULL,
        client_name VARCHAR(100),
        note TEXT,
        sold_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_sales_seller_sold_at ON sales (seller_id, sold_at)",
    """
    CREATE TABLE IF NOT EXISTS consignments (
        id SERIAL PRIMARY KEY,
        seller_id INTEGER NOT NULL REFERENCES sellers(id),
        piece_count INTEGER NOT NULL,
        total_value NUMERIC(12,2) NOT NULL DEFAULT 0,
        client_name VARCHAR(100) NOT NULL,
        note TEXT,
        recorded_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS attendances (
        id SERIAL PRIMARY KEY,
        seller_id INTEGER NOT NULL REFERENCES sellers(id),
        visits INTEGER NOT NULL CHECK (visits >= 0),
        visit_date DATE NOT NULL,
        UNIQUE (seller_id, visit_date)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS goal_overrides (
        id SERIAL PRIMARY KEY,
        seller_id INTEGER NOT NULL REFERENCES sellers(id),
        amount NUMERIC(12,2) NOT NULL CHECK (amount >= 0),
        goal_date DATE NOT NULL,
        UNIQUE (seller_id, goal_date)
    )
    """,
]


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(text(statement))
    logger.info("Schema ready (%d statements)", len(SCHEMA_STATEMENTS))


async def ensure_bootstrap_manager(engine: AsyncEngine) -> None:
    """Create the configured first manager if it does not exist yet."""
    name = settings.bootstrap_manager_name
    password = settings.bootstrap_manager_password
    if not name or not password:
        return

    sessionmaker = build_sessionmaker(engine)
    async with sessionmaker() as session:
        if await connector.fetch_seller_by_name(session, name) is not None:
            return
        await connector.insert_seller(
            session,
            name=name,
            password_hash=await hash_password(password),
            is_manager=True,
            monthly_quota=None,
            default_daily_target=Decimal("0"),
        )
    logger.info("Bootstrap manager %r created", name)
