
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select, update

from studio_pos.db.models.customers import Customer

async def list_customers(db: AsyncSession) -> List[Customer]:
    result = await db.execute(
        select(Customer).order_by(Customer.created_at.desc(), Customer.id)
    )
    return list(result.scalars().all())

async def get_customer_by_id(
    db: AsyncSession,
    customer_id: UUID
) -> Optional[Customer]:
    result = await db.execute(
        select(Customer).where(Customer.id == customer_id)
    )
    return result.scalar_one_or_none()

async def find_customers_by_phone(
    db: AsyncSession,
    phone: str
) -> List[Customer]:
    result = await db.execute(
        select(Customer).where(Customer.phone == phone)
    )
    return list(result.scalars().all())

async def record_booking(
    db: AsyncSession,
    customer_id: UUID,
    service: Optional[str] = None,
) -> int:
    """Bump the booking counter in place and stamp the latest service.

    Returns the number of matched rows.
    """
    result = await db.execute(
        update(Customer)
        .where(Customer.id == customer_id)
        .values(
            total_bookings=Customer.total_bookings + 1,
            last_service=service,
            last_booking_at=func.now(),
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount

async def merge_customer_fields(
    db: AsyncSession,
    customer_id: UUID,
    values: Dict[str, Any],
) -> int:
    result = await db.execute(
        update(Customer)
        .where(Customer.id == customer_id)
        .values(**values)
    )
    return result.rowcount
