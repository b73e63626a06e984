# studio_pos/api/v1/routes_customers.py
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession


from studio_pos.db.base import get_db
from studio_pos.domain.customers.schemas import CustomerCreate, CustomerOut, CustomerStats, CustomerUpdate
from studio_pos.domain.customers.service import (
    create_customer,
    customer_stats,
    delete_customer,
    get_customer,
    list_customers,
    update_customer,
)
from studio_pos.domain.pos.history import load_history
from studio_pos.domain.transactions.schemas import TransactionOut


router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("", response_model=List[CustomerOut])
async def list_customers_endpoint(
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await list_customers(db, search)

@router.get("/stats", response_model=CustomerStats)
async def customer_stats_endpoint(db: AsyncSession = Depends(get_db)):
    return await customer_stats(db)

@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
async def create_customer_endpoint(
    payload: CustomerCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_customer(db, payload)

@router.get("/{customer_id}", response_model=CustomerOut)
async def get_customer_endpoint(
    customer_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await get_customer(db, customer_id)

@router.patch("/{customer_id}", response_model=CustomerOut)
async def update_customer_endpoint(
    customer_id: UUID,
    payload: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await update_customer(db, customer_id, payload)

@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer_endpoint(
    customer_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    await delete_customer(db, customer_id)

@router.get("/{customer_id}/transactions", response_model=List[TransactionOut])
async def customer_history_endpoint(
    customer_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await load_history(db, customer_id)
