# studio_pos/api/v1/routes_transactions.py
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession


from studio_pos.db.base import get_db
from studio_pos.domain.transactions.schemas import RevenueOut, TransactionOut
from studio_pos.domain.transactions.service import (
    delete_transaction,
    get_transaction,
    list_transactions,
    revenue_for_day,
)


router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.get("", response_model=List[TransactionOut])
async def list_transactions_endpoint(
    day: Optional[date] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await list_transactions(db, day=day, search=search)

@router.get("/revenue", response_model=RevenueOut)
async def revenue_endpoint(
    day: date = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return await revenue_for_day(db, day)

@router.get("/{transaction_id}", response_model=TransactionOut)
async def get_transaction_endpoint(
    transaction_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await get_transaction(db, transaction_id)

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(
    transaction_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    await delete_transaction(db, transaction_id)
