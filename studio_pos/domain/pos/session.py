# studio_pos/domain/pos/session.py
"""Billing sessions: one open bill per counter, plus its read caches.

A `BillingSession` is plain Python state owned by whoever drives the counter
(the HTTP layer keeps them in a `SessionRegistry`). Bill edits are
synchronous and local; only refreshes, the final commit and the background
catalog saves touch the database.
"""
import asyncio
import logging
import uuid
from typing import Dict, List, Optional, Set

from sqlalchemy.exc import SQLAlchemyError

from studio_pos.core.errors import BillBusyError, ConfirmationRequiredError, NotFoundError
from studio_pos.db.repositories.customers import list_customers
from studio_pos.domain.pos.bill import Bill, BillItem, Product
from studio_pos.domain.pos.catalog import find_product, is_known_product, load_catalog, save_pos_item
from studio_pos.domain.pos.committer import check_bill, complete_bill
from studio_pos.domain.pos.customers import resolve_or_stage_customer, suggest_customers

logger = logging.getLogger(__name__)


class BillingSession:
    def __init__(self, session_factory, session_id: str = None):
        self.id = session_id or uuid.uuid4().hex
        self.bill = Bill()
        self.bound_customer = None
        self.catalog: List[Product] = []
        self.customers: List = []
        self._session_factory = session_factory
        self._tasks: Set[asyncio.Task] = set()
        # held while the bill is being committed; edits are refused meanwhile
        self._saving = asyncio.Lock()

    # -------------------------
    # Caches
    # -------------------------
    async def refresh(self) -> None:
        await self.refresh_catalog()
        await self.refresh_customers()

    async def refresh_catalog(self) -> None:
        self.catalog = await load_catalog(self._session_factory)

    async def refresh_customers(self) -> None:
        # a stale list is still usable, so keep it when the reload fails
        try:
            async with self._session_factory() as db:
                self.customers = await list_customers(db)
        except SQLAlchemyError:
            logger.exception("Failed to refresh customers for billing session %s", self.id)

    # -------------------------
    # Customer
    # -------------------------
    def set_customer(self, name: str, phone: str) -> None:
        self._ensure_editable()
        self.bill.set_customer(name, phone)
        self.bound_customer = None

    def bind_customer(self, customer_id) -> None:
        self._ensure_editable()
        for customer in self.customers:
            if customer.id == customer_id:
                self.bound_customer = customer
                self.bill.set_customer(customer.name, customer.phone)
                return
        raise NotFoundError("Customer not found")

    def suggestions(self, text: Optional[str] = None) -> List:
        return suggest_customers(self.customers, self.bill.customer_name if text is None else text)

    # -------------------------
    # Items
    # -------------------------
    def select_catalog_item(self, name: str) -> Product:
        self._ensure_editable()
        product = find_product(self.catalog, name)
        if product is None:
            raise NotFoundError("Item not found in catalog")
        self.bill.select_catalog_item(product)
        return product

    def add_item(self, name: str = None, rate=None, qty: int = None) -> BillItem:
        """Add a line to the bill; must be called from a running event loop.

        Names the catalog does not know yet are remembered in the background.
        """
        self._ensure_editable()
        item = self.bill.add_item(
            self.bill.pending_name if name is None else name,
            self.bill.pending_rate if rate is None else rate,
            self.bill.pending_qty if qty is None else qty,
        )
        if not is_known_product(self.catalog, item.name):
            self.catalog.append(Product(name=item.name, rate=item.rate))
            self._spawn(self._remember_item(item.name, item.rate))
        return item

    def remove_item(self, item_id: str) -> bool:
        self._ensure_editable()
        return self.bill.remove_item(item_id)

    def set_discount_percent(self, value) -> None:
        self._ensure_editable()
        self.bill.set_discount_percent(value)

    def clear(self, confirm: bool = False) -> None:
        self._ensure_editable()
        if not confirm:
            raise ConfirmationRequiredError()
        self.bill.clear()
        self.bound_customer = None

    # -------------------------
    # Commit
    # -------------------------
    @property
    def is_saving(self) -> bool:
        return self._saving.locked()

    def _ensure_editable(self) -> None:
        if self.is_saving:
            raise BillBusyError()

    async def complete(self):
        """Commit the bill; a second call while the first is saving is refused."""
        self._ensure_editable()
        async with self._saving:
            check_bill(self.bill)
            resolution = resolve_or_stage_customer(
                self.bill.customer_name,
                self.bill.customer_phone,
                self.customers,
                bound=self.bound_customer,
            )
            async with self._session_factory() as db:
                txn = await complete_bill(db, self.bill, resolution)

            self.bill.clear()
            self.bound_customer = None
            await self.refresh_customers()
        return txn

    # -------------------------
    # Background work
    # -------------------------
    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _remember_item(self, name: str, rate) -> None:
        try:
            await save_pos_item(self._session_factory, name, rate)
        except SQLAlchemyError:
            logger.exception("Failed to save new item %r to the POS catalog", name)

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background task failed in billing session %s", self.id, exc_info=task.exception())


class SessionRegistry:
    def __init__(self):
        self._sessions: Dict[str, BillingSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(self, session_factory) -> BillingSession:
        session = BillingSession(session_factory)
        await session.refresh()
        self._sessions[session.id] = session
        logger.info("Opened billing session %s", session.id)
        return session

    def get(self, session_id: str) -> BillingSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise NotFoundError("Billing session not found")

    async def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise NotFoundError("Billing session not found")
        await session.drain()
        logger.info("Closed billing session %s", session_id)

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close(session_id)
