# studio_pos/domain/pos/reconcile.py
"""Consistency check between customer booking counters and stored sales.

Counters are only ever incremented by the billing flow, so a customer whose
counter is below the number of transactions on file has lost an update.
A transaction pointing at a customer that no longer exists is an orphan.
Counters above the transaction count are normal (online bookings count too).
"""
import logging
from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studio_pos.core.errors import PersistenceError
from studio_pos.db.repositories.customers import list_customers, merge_customer_fields
from studio_pos.db.repositories.transactions import count_transactions_by_customer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CounterDrift:
    customer_id: UUID
    recorded: int
    transactions: int


@dataclass
class BookingAudit:
    lagging: List[CounterDrift] = field(default_factory=list)
    orphaned_customer_ids: List[UUID] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.lagging and not self.orphaned_customer_ids


async def audit_booking_counts(db: AsyncSession) -> BookingAudit:
    try:
        customers = await list_customers(db)
        counts = await count_transactions_by_customer(db)
    except SQLAlchemyError:
        logger.exception("Booking audit could not read customers/transactions")
        raise PersistenceError()

    audit = BookingAudit()
    known = set()
    for customer in customers:
        known.add(customer.id)
        stored = counts.get(customer.id, 0)
        if (customer.total_bookings or 0) < stored:
            audit.lagging.append(CounterDrift(customer.id, customer.total_bookings or 0, stored))
    audit.orphaned_customer_ids = sorted(cid for cid in counts if cid not in known)

    if not audit.is_clean:
        logger.warning(
            "Booking audit found %d lagging counters and %d orphaned customer references",
            len(audit.lagging), len(audit.orphaned_customer_ids),
        )
    return audit


async def repair_booking_counts(db: AsyncSession) -> BookingAudit:
    """Raise lagging counters to the number of stored transactions.

    Orphans are reported, not touched. Returns the audit that was repaired.
    """
    audit = await audit_booking_counts(db)
    if not audit.lagging:
        return audit
    try:
        for drift in audit.lagging:
            await merge_customer_fields(db, drift.customer_id, {"total_bookings": drift.transactions})
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Booking counter repair failed")
        raise PersistenceError()
    logger.info("Repaired %d booking counters", len(audit.lagging))
    return audit
