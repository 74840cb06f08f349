"""Sales, consignment and attendance payloads."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class SaleIn(BaseModel):
    amount: Decimal = Field(..., ge=0)
    payment_method: str = Field(..., min_length=1, max_length=50)
    piece_count: int | None = Field(default=None, ge=0)
    client_name: str | None = Field(default=None, max_length=100)
    note: str | None = None


class SaleOut(SaleIn):
    id: int
    seller_id: int
    sold_at: datetime


class ConsignmentIn(BaseModel):
    piece_count: int = Field(..., gt=0)
    client_name: str = Field(..., min_length=1, max_length=100)
    total_value: Decimal = Field(default=Decimal("0"), ge=0)
    note: str | None = None


class ConsignmentOut(ConsignmentIn):
    id: int
    seller_id: int
    recorded_at: datetime


class AttendanceIn(BaseModel):
    visit_date: date
    visits: int = Field(default=0, ge=0)


class AttendanceOut(AttendanceIn):
    seller_id: int
