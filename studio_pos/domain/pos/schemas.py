# studio_pos/domain/pos/schemas.py
from decimal import Decimal
from pydantic import BaseModel
from uuid import UUID
from typing import List, Optional

class ProductOut(BaseModel):
    name: str
    rate: Decimal

    class Config:
        from_attributes = True

class SelectProduct(BaseModel):
    name: str

class CustomerInput(BaseModel):
    name: str = ""
    phone: str = ""

class BindCustomer(BaseModel):
    customer_id: UUID

class AddItem(BaseModel):
    # omitted fields fall back to the item picked from the catalog
    name: Optional[str] = None
    rate: Optional[Decimal] = None
    qty: Optional[int] = None

class DiscountInput(BaseModel):
    percent: Decimal

class ClearBill(BaseModel):
    confirm: bool = False

class BillItemOut(BaseModel):
    id: str
    name: str
    qty: int
    rate: Decimal
    amount: Decimal

    class Config:
        from_attributes = True

class PendingItemOut(BaseModel):
    name: str
    rate: Decimal
    qty: int

class BillOut(BaseModel):
    session_id: str
    customer_name: str
    customer_phone: str
    bound_customer_id: Optional[UUID]
    items: List[BillItemOut]
    pending: PendingItemOut
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    grand_total: Decimal

class CounterDriftOut(BaseModel):
    customer_id: UUID
    recorded: int
    transactions: int

    class Config:
        from_attributes = True

class BookingAuditOut(BaseModel):
    is_clean: bool
    lagging: List[CounterDriftOut]
    orphaned_customer_ids: List[UUID]

    class Config:
        from_attributes = True


def bill_view(session) -> BillOut:
    bill = session.bill
    totals = bill.totals()
    bound = session.bound_customer
    return BillOut(
        session_id=session.id,
        customer_name=bill.customer_name,
        customer_phone=bill.customer_phone,
        bound_customer_id=bound.id if bound is not None else None,
        items=[BillItemOut.model_validate(item) for item in bill.items],
        pending=PendingItemOut(name=bill.pending_name, rate=bill.pending_rate, qty=bill.pending_qty),
        subtotal=totals.subtotal,
        discount_percent=totals.discount_percent,
        discount_amount=totals.discount_amount,
        grand_total=totals.grand_total,
    )
