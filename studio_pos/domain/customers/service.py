# studio_pos/domain/customers/service.py
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studio_pos.core.errors import DuplicatePhoneError, NotFoundError, PersistenceError, ValidationError
from studio_pos.db.models.customers import Customer, CustomerSource
from studio_pos.db.repositories import customers as repo
from studio_pos.domain.pos.customers import suggest_customers
from .schemas import CustomerCreate, CustomerStats, CustomerUpdate

logger = logging.getLogger(__name__)

# fields the back office may edit; source, counters and created_at are never touched
EDITABLE_FIELDS = ("name", "phone", "email", "baby_details", "notes")
REQUIRED_FIELDS = ("name", "phone")


async def list_customers(
    db: AsyncSession,
    search: Optional[str] = None
) -> List[Customer]:
    try:
        customers = await repo.list_customers(db)
    except SQLAlchemyError:
        logger.exception("Error fetching customers")
        raise PersistenceError("Failed to load customers")
    if search:
        return suggest_customers(customers, search, limit=len(customers))
    return customers

async def get_customer(
    db: AsyncSession,
    customer_id: UUID
) -> Customer:
    customer = await repo.get_customer_by_id(db, customer_id)
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer

async def create_customer(
    db: AsyncSession,
    data: CustomerCreate
) -> Customer:
    name = data.name.strip()
    phone = data.phone.strip()
    if not name or not phone:
        raise ValidationError("Name and Phone are required")

    try:
        if await repo.find_customers_by_phone(db, phone):
            raise DuplicatePhoneError()

        customer = Customer(
            name=name,
            phone=phone,
            email=data.email or "",
            baby_details=data.baby_details,
            notes=data.notes,
            total_bookings=0,
            source=CustomerSource.OFFLINE,
        )
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to create customer %s", phone)
        raise PersistenceError("Failed to save customer")

    logger.info("Created customer %s (%s)", customer.id, customer.phone)
    return customer

async def update_customer(
    db: AsyncSession,
    customer_id: UUID,
    data: CustomerUpdate
) -> Customer:
    customer = await get_customer(db, customer_id)

    # an explicit null clears an optional field; name and phone cannot be cleared
    values = {}
    for key, value in data.model_dump(exclude_unset=True).items():
        if key not in EDITABLE_FIELDS:
            continue
        if key in REQUIRED_FIELDS:
            value = (value or "").strip()
        values[key] = value
    if any(key in values and not values[key] for key in REQUIRED_FIELDS):
        raise ValidationError("Name and Phone are required")
    if not values:
        return customer

    try:
        if values.get("phone") and values["phone"] != customer.phone:
            others = await repo.find_customers_by_phone(db, values["phone"])
            if any(other.id != customer.id for other in others):
                raise DuplicatePhoneError()
        await repo.merge_customer_fields(db, customer_id, values)
        await db.commit()
        await db.refresh(customer)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to update customer %s", customer_id)
        raise PersistenceError("Failed to save customer")

    return customer

async def delete_customer(
    db: AsyncSession,
    customer_id: UUID
) -> None:
    customer = await get_customer(db, customer_id)
    try:
        await db.delete(customer)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to delete customer %s", customer_id)
        raise PersistenceError("Failed to delete")
    logger.info("Deleted customer %s", customer_id)

async def customer_stats(db: AsyncSession) -> CustomerStats:
    customers = await list_customers(db)
    online = sum(1 for c in customers if c.source == CustomerSource.ONLINE)
    return CustomerStats(
        total=len(customers),
        online=online,
        offline=len(customers) - online,
    )
