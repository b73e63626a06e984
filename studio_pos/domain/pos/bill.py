# studio_pos/domain/pos/bill.py
"""In-progress bill held by a billing session.

Nothing here touches the database. Totals are derived from the item list on
every call so they can never drift from what is on the bill.
"""
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from studio_pos.core.errors import InvalidDiscountError, InvalidItemError

HUNDRED = Decimal("100")


def new_item_id() -> str:
    return uuid.uuid4().hex[:12]


def to_decimal(value) -> Optional[Decimal]:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


@dataclass(frozen=True)
class Product:
    name: str
    rate: Decimal


@dataclass
class BillItem:
    id: str
    name: str
    qty: int
    rate: Decimal

    @property
    def amount(self) -> Decimal:
        return self.rate * self.qty


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    grand_total: Decimal


@dataclass
class Bill:
    customer_name: str = ""
    customer_phone: str = ""
    items: List[BillItem] = field(default_factory=list)
    discount_percent: Decimal = Decimal("0")

    pending_name: str = ""
    pending_rate: Decimal = Decimal("0")
    pending_qty: int = 1

    @property
    def is_empty(self) -> bool:
        return not self.items

    def select_catalog_item(self, product: Product) -> None:
        self.pending_name = product.name
        self.pending_rate = product.rate
        self.pending_qty = 1

    def add_item(self, name: str, rate, qty=1) -> BillItem:
        name = (name or "").strip()
        rate = to_decimal(rate)
        if not name or rate is None or not rate.is_finite() or rate <= 0:
            raise InvalidItemError()
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
            raise InvalidItemError("Quantity must be a whole number of at least 1")

        item = BillItem(id=new_item_id(), name=name, qty=qty, rate=rate)
        self.items.append(item)
        self._reset_pending()
        return item

    def remove_item(self, item_id: str) -> bool:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                del self.items[index]
                return True
        return False

    def set_discount_percent(self, value) -> None:
        percent = to_decimal(value)
        if percent is None or not percent.is_finite() or percent < 0 or percent > HUNDRED:
            raise InvalidDiscountError()
        self.discount_percent = percent

    def set_customer(self, name: str, phone: str) -> None:
        self.customer_name = (name or "").strip()
        self.customer_phone = (phone or "").strip()

    def clear(self) -> None:
        self.customer_name = ""
        self.customer_phone = ""
        self.items = []
        self.discount_percent = Decimal("0")
        self._reset_pending()

    def totals(self) -> Totals:
        subtotal = sum((item.amount for item in self.items), Decimal("0"))
        discount_amount = subtotal * self.discount_percent / HUNDRED
        return Totals(
            subtotal=subtotal,
            discount_percent=self.discount_percent,
            discount_amount=discount_amount,
            grand_total=subtotal - discount_amount,
        )

    def _reset_pending(self) -> None:
        self.pending_name = ""
        self.pending_rate = Decimal("0")
        self.pending_qty = 1
