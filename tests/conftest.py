from datetime import datetime
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from studio_pos.db.base import get_db, get_session_factory, init_models
from studio_pos.db.models.catalog import PackageItem, PosItem
from studio_pos.db.models.customers import Customer, CustomerSource
from studio_pos.db.models.line_items import LineItem
from studio_pos.db.models.transactions import Transaction
from studio_pos.domain.pos.session import BillingSession, SessionRegistry
from studio_pos.main import app


class _WriteCounter:
    """Counts INSERT/UPDATE/DELETE statements sent to the database."""

    def __init__(self):
        self.statements = []

    def __call__(self, conn, cursor, statement, parameters, context, executemany):
        verb = statement.lstrip().split(" ", 1)[0].upper()
        if verb in {"INSERT", "UPDATE", "DELETE"}:
            self.statements.append(statement)

    @property
    def count(self) -> int:
        return len(self.statements)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'studio_pos.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def write_counter(engine):
    counter = _WriteCounter()
    event.listen(engine.sync_engine, "before_cursor_execute", counter)
    yield counter
    event.remove(engine.sync_engine, "before_cursor_execute", counter)


@pytest.fixture
async def billing(session_factory):
    session = BillingSession(session_factory)
    await session.refresh()
    yield session
    await session.drain()


@pytest.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.state.billing_sessions = SessionRegistry()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    await app.state.billing_sessions.close_all()
    app.dependency_overrides.clear()


@pytest.fixture
def make_customer(session_factory):
    async def _make(
        name="Asha Rao",
        phone="9000000001",
        total_bookings=0,
        source=CustomerSource.OFFLINE,
        created_at=None,
    ):
        async with session_factory() as session:
            customer = Customer(
                name=name,
                phone=phone,
                email="",
                total_bookings=total_bookings,
                source=source,
            )
            if created_at is not None:
                customer.created_at = created_at
            session.add(customer)
            await session.commit()
            await session.refresh(customer)
            return customer
    return _make


@pytest.fixture
def make_package(session_factory):
    async def _make(name, price, sort_order=0):
        async with session_factory() as session:
            package = PackageItem(name=name, price=price, sort_order=sort_order)
            session.add(package)
            await session.commit()
            return package
    return _make


@pytest.fixture
def make_pos_item(session_factory):
    async def _make(name, rate):
        async with session_factory() as session:
            item = PosItem(name=name, rate=Decimal(str(rate)))
            session.add(item)
            await session.commit()
            return item
    return _make


@pytest.fixture
def make_transaction(session_factory):
    async def _make(customer_id, created_at: datetime = None, grand_total="1000", name="Asha Rao", phone="9000000001"):
        total = Decimal(grand_total)
        async with session_factory() as session:
            txn = Transaction(
                customer_id=customer_id,
                customer_name=name,
                customer_phone=phone,
                subtotal=total,
                discount_percent=Decimal("0"),
                discount_amount=Decimal("0"),
                grand_total=total,
                status="paid",
            )
            txn.items.append(LineItem(line_number=1, name="Portrait Session", qty=1, rate=total, amount=total))
            if created_at is not None:
                txn.created_at = created_at
            session.add(txn)
            await session.commit()
            await session.refresh(txn)
            return txn
    return _make
