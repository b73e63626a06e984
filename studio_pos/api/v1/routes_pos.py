# studio_pos/api/v1/routes_pos.py
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from studio_pos.api.v1.deps import get_billing_session, get_billing_sessions
from studio_pos.db.base import get_session_factory
from studio_pos.domain.customers.schemas import CustomerOut
from studio_pos.domain.pos.schemas import (
    AddItem,
    BillOut,
    BindCustomer,
    ClearBill,
    CustomerInput,
    DiscountInput,
    ProductOut,
    SelectProduct,
    bill_view,
)
from studio_pos.domain.pos.session import BillingSession, SessionRegistry
from studio_pos.domain.transactions.schemas import TransactionOut


router = APIRouter(prefix="/api/v1/pos/sessions", tags=["pos"])


@router.post("", response_model=BillOut, status_code=status.HTTP_201_CREATED)
async def open_session_endpoint(
    sessions: SessionRegistry = Depends(get_billing_sessions),
    session_factory=Depends(get_session_factory),
):
    session = await sessions.open(session_factory)
    return bill_view(session)

@router.get("/{session_id}", response_model=BillOut)
async def get_bill_endpoint(session: BillingSession = Depends(get_billing_session)):
    return bill_view(session)

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session_endpoint(
    session_id: str,
    sessions: SessionRegistry = Depends(get_billing_sessions),
):
    await sessions.close(session_id)

@router.post("/{session_id}/refresh", response_model=BillOut)
async def refresh_endpoint(session: BillingSession = Depends(get_billing_session)):
    await session.refresh()
    return bill_view(session)

@router.get("/{session_id}/catalog", response_model=List[ProductOut])
async def catalog_endpoint(session: BillingSession = Depends(get_billing_session)):
    return session.catalog

@router.post("/{session_id}/catalog/select", response_model=BillOut)
async def select_product_endpoint(
    payload: SelectProduct,
    session: BillingSession = Depends(get_billing_session),
):
    session.select_catalog_item(payload.name)
    return bill_view(session)

@router.put("/{session_id}/customer", response_model=BillOut)
async def set_customer_endpoint(
    payload: CustomerInput,
    session: BillingSession = Depends(get_billing_session),
):
    session.set_customer(payload.name, payload.phone)
    return bill_view(session)

@router.post("/{session_id}/customer/bind", response_model=BillOut)
async def bind_customer_endpoint(
    payload: BindCustomer,
    session: BillingSession = Depends(get_billing_session),
):
    session.bind_customer(payload.customer_id)
    return bill_view(session)

@router.get("/{session_id}/customer/suggestions", response_model=List[CustomerOut])
async def suggestions_endpoint(
    q: Optional[str] = Query(None),
    session: BillingSession = Depends(get_billing_session),
):
    return session.suggestions(q)

@router.post("/{session_id}/items", response_model=BillOut)
async def add_item_endpoint(
    payload: AddItem,
    session: BillingSession = Depends(get_billing_session),
):
    session.add_item(payload.name, payload.rate, payload.qty)
    return bill_view(session)

@router.delete("/{session_id}/items/{item_id}", response_model=BillOut)
async def remove_item_endpoint(
    item_id: str,
    session: BillingSession = Depends(get_billing_session),
):
    session.remove_item(item_id)
    return bill_view(session)

@router.put("/{session_id}/discount", response_model=BillOut)
async def discount_endpoint(
    payload: DiscountInput,
    session: BillingSession = Depends(get_billing_session),
):
    session.set_discount_percent(payload.percent)
    return bill_view(session)

@router.post("/{session_id}/clear", response_model=BillOut)
async def clear_endpoint(
    payload: ClearBill,
    session: BillingSession = Depends(get_billing_session),
):
    session.clear(confirm=payload.confirm)
    return bill_view(session)

@router.post("/{session_id}/complete", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
async def complete_endpoint(session: BillingSession = Depends(get_billing_session)):
    txn = await session.complete()
    return txn
