# studio_pos/domain/transactions/schemas.py
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel
from uuid import UUID
from typing import List, Optional

class LineItemOut(BaseModel):
    line_number: int
    name: str
    qty: int
    rate: Decimal
    amount: Decimal

    class Config:
        from_attributes = True

class TransactionOut(BaseModel):
    id: UUID
    customer_id: UUID
    customer_name: str
    customer_phone: str
    items: List[LineItemOut]
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    grand_total: Decimal
    status: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True

class RevenueOut(BaseModel):
    day: date
    currency: str
    transactions: int
    total: Decimal
