"""Record persistence — sales, consignments, attendances.

Writes are always scoped to the owning seller: an update or delete that
targets another seller's row simply matches nothing.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.db import dependency_errors, row_to_dict
from salesdesk.records.models import AttendanceIn, ConsignmentIn, SaleIn

_SALE_COLUMNS = "id, seller_id, amount, piece_count, payment_method, client_name, note, sold_at"
_CONSIGNMENT_COLUMNS = "id, seller_id, piece_count, total_value, client_name, note, recorded_at"


async def _fetch_one(session: AsyncSession, query: str, params: dict[str, Any], operation: str) -> dict[str, Any] | None:
    with dependency_errors(operation):
        result = await session.execute(text(query), params)
        row = result.fetchone()
        await session.commit()
    if row is None:
        return None
    return row_to_dict(result.keys(), row)


async def _fetch_all(session: AsyncSession, query: str, params: dict[str, Any], operation: str) -> list[dict[str, Any]]:
    with dependency_errors(operation):
        result = await session.execute(text(query), params)
        columns = result.keys()
        return [row_to_dict(columns, r) for r in result.fetchall()]


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------


async def insert_sale(session: AsyncSession, seller_id: int, sale: SaleIn) -> dict[str, Any]:
    query = (
        "INSERT INTO sales (seller_id, amount, piece_count, payment_method, client_name, note) "
        "VALUES (:seller_id, :amount, :piece_count, :payment_method, :client_name, :note) "
        f"RETURNING {_SALE_COLUMNS}"
    )
    row = await _fetch_one(session, query, {"seller_id": seller_id, **sale.model_dump()}, "sale insert")
    return row  # type: ignore[return-value]


async def update_sale(session: AsyncSession, seller_id: int, sale_id: int, sale: SaleIn) -> dict[str, Any] | None:
    query = (
        "UPDATE sales SET amount = :amount, piece_count = :piece_count, "
        "payment_method = :payment_method, client_name = :client_name, note = :note "
        f"WHERE id = :sale_id AND seller_id = :seller_id RETURNING {_SALE_COLUMNS}"
    )
    params = {"seller_id": seller_id, "sale_id": sale_id, **sale.model_dump()}
    return await _fetch_one(session, query, params, "sale update")


async def delete_sale(session: AsyncSession, seller_id: int, sale_id: int) -> bool:
    query = "DELETE FROM sales WHERE id = :sale_id AND seller_id = :seller_id RETURNING id"
    row = await _fetch_one(session, query, {"sale_id": sale_id, "seller_id": seller_id}, "sale delete")
    return row is not None


async def fetch_sales(
    session: AsyncSession,
    start: datetime,
    end_exclusive: datetime,
    seller_id: int | None = None,
) -> list[dict[str, Any]]:
    """Sales with sold_at in [start, end_exclusive), newest first.

    ``seller_id`` None means every seller (manager view).
    """
    query = f"SELECT {_SALE_COLUMNS} FROM sales WHERE sold_at >= :start AND sold_at < :end"
    params: dict[str, Any] = {"start": start, "end": end_exclusive}
    if seller_id is not None:
        query += " AND seller_id = :seller_id"
        params["seller_id"] = seller_id
    query += " ORDER BY sold_at DESC"
    return await _fetch_all(session, query, params, "sales listing")


# ---------------------------------------------------------------------------
# Consignments
# ---------------------------------------------------------------------------


async def insert_consignment(session: AsyncSession, seller_id: int, item: ConsignmentIn) -> dict[str, Any]:
    query = (
        "INSERT INTO consignments (seller_id, piece_count, total_value, client_name, note) "
        "VALUES (:seller_id, :piece_count, :total_value, :client_name, :note) "
        f"RETURNING {_CONSIGNMENT_COLUMNS}"
    )
    row = await _fetch_one(session, query, {"seller_id": seller_id, **item.model_dump()}, "consignment insert")
    return row  # type: ignore[return-value]


async def fetch_consignments(session: AsyncSession, seller_id: int | None = None) -> list[dict[str, Any]]:
    query = f"SELECT {_CONSIGNMENT_COLUMNS} FROM consignments"
    params: dict[str, Any] = {}
    if seller_id is not None:
        query += " WHERE seller_id = :seller_id"
        params["seller_id"] = seller_id
    query += " ORDER BY recorded_at DESC"
    return await _fetch_all(session, query, params, "consignment listing")


async def delete_consignment(session: AsyncSession, seller_id: int, consignment_id: int) -> bool:
    query = "DELETE FROM consignments WHERE id = :consignment_id AND seller_id = :seller_id RETURNING id"
    params = {"consignment_id": consignment_id, "seller_id": seller_id}
    return await _fetch_one(session, query, params, "consignment delete") is not None


# ---------------------------------------------------------------------------
# Attendances
# ---------------------------------------------------------------------------


async def upsert_attendance(session: AsyncSession, seller_id: int, item: AttendanceIn) -> dict[str, Any]:
    query = (
        "INSERT INTO attendances (seller_id, visits, visit_date) "
        "VALUES (:seller_id, :visits, :visit_date) "
        "ON CONFLICT (seller_id, visit_date) DO UPDATE SET visits = EXCLUDED.visits "
        "RETURNING seller_id, visits, visit_date"
    )
    row = await _fetch_one(session, query, {"seller_id": seller_id, **item.model_dump()}, "attendance upsert")
    return row  # type: ignore[return-value]


async def fetch_attendance(session: AsyncSession, seller_id: int, visit_date: date) -> dict[str, Any] | None:
    query = (
        "SELECT seller_id, visits, visit_date FROM attendances "
        "WHERE seller_id = :seller_id AND visit_date = :visit_date"
    )
    rows = await _fetch_all(session, query, {"seller_id": seller_id, "visit_date": visit_date}, "attendance lookup")
    return rows[0] if rows else None
