# studio_pos/domain/transactions/service.py
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Tuple
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studio_pos.core.config import settings
from studio_pos.core.errors import NotFoundError, PersistenceError
from studio_pos.db.models.transactions import Transaction
from studio_pos.db.repositories import transactions as repo
from .schemas import RevenueOut

logger = logging.getLogger(__name__)


def day_bounds(day: date, tz: str = None) -> Tuple[datetime, datetime]:
    """UTC [start, end) of a calendar day in the studio's timezone."""
    name = tz or settings.TIMEZONE
    zone = timezone.utc if name.upper() == "UTC" else ZoneInfo(name)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def matches_search(txn: Transaction, search: str) -> bool:
    lowered = search.lower()
    return (
        lowered in (txn.customer_name or "").lower()
        or search in (txn.customer_phone or "")
        or lowered in str(txn.id).lower()
    )


async def list_transactions(
    db: AsyncSession,
    day: Optional[date] = None,
    search: Optional[str] = None,
) -> List[Transaction]:
    start, end = day_bounds(day) if day is not None else (None, None)
    try:
        transactions = await repo.list_transactions(db, start=start, end=end)
    except SQLAlchemyError:
        logger.exception("Error fetching transactions")
        raise PersistenceError("Failed to load transactions")

    search = (search or "").strip()
    if search:
        transactions = [txn for txn in transactions if matches_search(txn, search)]
    return transactions


async def get_transaction(
    db: AsyncSession,
    transaction_id: UUID
) -> Transaction:
    txn = await repo.get_transaction_by_id(db, transaction_id)
    if txn is None:
        raise NotFoundError("Transaction not found")
    return txn

async def delete_transaction(
    db: AsyncSession,
    transaction_id: UUID
) -> None:
    # hard delete; the customer's booking counter is left as it is
    try:
        deleted = await repo.delete_transaction_by_id(db, transaction_id)
        if deleted:
            await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Delete error for transaction %s", transaction_id)
        raise PersistenceError("Failed to delete record")

    if not deleted:
        raise NotFoundError("Transaction not found")
    logger.info("Deleted transaction %s", transaction_id)

async def revenue_for_day(
    db: AsyncSession,
    day: date
) -> RevenueOut:
    start, end = day_bounds(day)
    try:
        count, total = await repo.revenue_between(db, start, end)
    except SQLAlchemyError:
        logger.exception("Error computing revenue for %s", day)
        raise PersistenceError("Failed to load revenue")
    return RevenueOut(day=day, currency=settings.CURRENCY, transactions=count, total=total)
