# studio_pos/domain/pos/history.py
import logging
from datetime import datetime, timezone
from typing import Iterable, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studio_pos.core.errors import HistoryLoadError
from studio_pos.db.models.transactions import Transaction
from studio_pos.db.repositories.transactions import get_transactions_for_customer

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value is None:
        return _OLDEST
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def sort_newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Newest first; undated records last, equal timestamps by id descending."""
    return sorted(
        transactions,
        key=lambda txn: (_as_utc(txn.created_at), txn.id),
        reverse=True,
    )


async def load_history(db: AsyncSession, customer_id: UUID) -> List[Transaction]:
    try:
        transactions = await get_transactions_for_customer(db, customer_id)
    except SQLAlchemyError:
        logger.exception("Failed to load transaction history for customer %s", customer_id)
        raise HistoryLoadError()
    return sort_newest_first(transactions)
