# studio_pos/domain/pos/committer.py
import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import func
from sqlalchemy.ext.asyncio import AsyncSession

from studio_pos.core.errors import EmptyBillError, MissingCustomerInfoError, TransactionSaveError
from studio_pos.db.models.customers import Customer, CustomerSource
from studio_pos.db.models.line_items import LineItem
from studio_pos.db.models.transactions import PAID, Transaction
from studio_pos.db.repositories.customers import record_booking
from studio_pos.domain.pos.bill import Bill
from studio_pos.domain.pos.customers import CustomerResolution

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def check_bill(bill: Bill) -> None:
    if bill.is_empty:
        raise EmptyBillError()
    if not bill.customer_name or not bill.customer_phone:
        raise MissingCustomerInfoError()


def booked_service(bill: Bill):
    # the first line is the package the sale was rung up for
    return bill.items[0].name if bill.items else None


def build_transaction(bill: Bill, customer_id) -> Transaction:
    totals = bill.totals()
    txn = Transaction(
        customer_id=customer_id,
        customer_name=bill.customer_name,
        customer_phone=bill.customer_phone,
        subtotal=money(totals.subtotal),
        discount_percent=totals.discount_percent,
        discount_amount=money(totals.discount_amount),
        grand_total=money(totals.grand_total),
        status=PAID,
    )
    for line_number, item in enumerate(bill.items, start=1):
        txn.items.append(LineItem(
            line_number=line_number,
            name=item.name,
            qty=item.qty,
            rate=money(item.rate),
            amount=money(item.amount),
        ))
    return txn


async def complete_bill(
    db: AsyncSession,
    bill: Bill,
    resolution: CustomerResolution,
) -> Transaction:
    """Persist the bill as a paid transaction and update its customer.

    The customer write and the transaction insert are committed together, so a
    failure leaves neither behind. The bill itself is not modified here.
    """
    check_bill(bill)
    service = booked_service(bill)

    try:
        if resolution.is_new:
            staged = resolution.staged
            db.add(Customer(
                id=staged.id,
                name=staged.name,
                phone=staged.phone,
                email="",
                total_bookings=1,
                source=CustomerSource.OFFLINE_POS,
                last_service=service,
                last_booking_at=func.now(),
            ))
        else:
            matched = await record_booking(db, resolution.existing_id, service)
            if matched == 0:
                logger.error("Customer %s vanished before the bill was saved", resolution.existing_id)
                raise TransactionSaveError()

        txn = build_transaction(bill, resolution.customer_id)
        db.add(txn)
        await db.commit()
    except SQLAlchemyError:
        logger.exception("Failed to save transaction for %s", bill.customer_phone)
        await db.rollback()
        raise TransactionSaveError()
    except TransactionSaveError:
        await db.rollback()
        raise

    logger.info(
        "Saved transaction %s for customer %s (%s, total %s)",
        txn.id, resolution.customer_id, "new" if resolution.is_new else "returning", txn.grand_total,
    )
    # created_at comes back with the INSERT; items are already attached
    return txn
