# studio_pos/domain/pos/customers.py
import re
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional
from uuid import UUID

_NON_DIGITS = re.compile(r"\D")


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


@dataclass(frozen=True)
class StagedCustomer:
    """A walk-in customer to be created together with the sale."""
    id: UUID
    name: str
    phone: str


@dataclass(frozen=True)
class CustomerResolution:
    existing_id: Optional[UUID] = None
    staged: Optional[StagedCustomer] = None

    @property
    def customer_id(self) -> UUID:
        return self.existing_id if self.existing_id is not None else self.staged.id

    @property
    def is_new(self) -> bool:
        return self.staged is not None


def suggest_customers(customers: Iterable, text: str, limit: int = 10) -> List:
    """Customers whose name contains `text` (any case) or whose phone contains it."""
    text = (text or "").strip()
    if not text:
        return []
    lowered = text.lower()
    digits = _digits(text)

    matches = []
    for customer in customers:
        name = (customer.name or "").lower()
        phone = customer.phone or ""
        if lowered in name or text in phone or (digits and digits in _digits(phone)):
            matches.append(customer)
            if len(matches) >= limit:
                break
    return matches


def find_by_phone(customers: Iterable, phone: str):
    for customer in customers:
        if customer.phone == phone:
            return customer
    return None


def resolve_or_stage_customer(
    name: str,
    phone: str,
    customers: Iterable,
    bound=None,
) -> CustomerResolution:
    if bound is not None:
        return CustomerResolution(existing_id=bound.id)

    # returning customer keeps the name already on file
    existing = find_by_phone(customers, phone)
    if existing is not None:
        return CustomerResolution(existing_id=existing.id)

    return CustomerResolution(
        staged=StagedCustomer(id=uuid.uuid4(), name=name, phone=phone),
    )
