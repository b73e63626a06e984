
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select

from studio_pos.db.models.transactions import Transaction

async def get_transaction_by_id(
    db: AsyncSession,
    transaction_id: UUID
) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id)
    )
    txn = result.scalar_one_or_none()
    return txn

async def get_transactions_for_customer(
    db: AsyncSession,
    customer_id: UUID
) -> List[Transaction]:
    # equality filter only; callers sort, so no composite index is needed
    result = await db.execute(
        select(Transaction).where(Transaction.customer_id == customer_id)
    )
    return list(result.scalars().all())

async def list_transactions(
    db: AsyncSession,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Transaction]:
    query = select(Transaction)
    if start is not None:
        query = query.where(Transaction.created_at >= start)
    if end is not None:
        query = query.where(Transaction.created_at < end)
    result = await db.execute(
        query.order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    return list(result.scalars().all())

async def revenue_between(
    db: AsyncSession,
    start: datetime,
    end: datetime,
) -> Tuple[int, Decimal]:
    result = await db.execute(
        select(func.count(Transaction.id), func.coalesce(func.sum(Transaction.grand_total), 0))
        .where(Transaction.created_at >= start, Transaction.created_at < end)
    )
    count, total = result.one()
    return count, Decimal(str(total))

async def count_transactions_by_customer(db: AsyncSession) -> Dict[UUID, int]:
    result = await db.execute(
        select(Transaction.customer_id, func.count(Transaction.id))
        .group_by(Transaction.customer_id)
    )
    return {customer_id: count for customer_id, count in result.all()}

async def delete_transaction_by_id(
    db: AsyncSession,
    transaction_id: UUID
) -> bool:
    txn = await get_transaction_by_id(db, transaction_id)
    if txn is None:
        return False
    await db.delete(txn)
    return True
