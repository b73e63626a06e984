import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from studio_pos.core.errors import HistoryLoadError
from studio_pos.domain.pos import history
from studio_pos.domain.pos.history import load_history, sort_newest_first

BASE = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


def _txn(created_at, txn_id=None):
    return SimpleNamespace(id=txn_id or uuid.uuid4(), created_at=created_at)


def test_sorted_newest_first():
    old = _txn(BASE)
    mid = _txn(BASE + timedelta(hours=1))
    new = _txn(BASE + timedelta(days=2))

    assert sort_newest_first([mid, old, new]) == [new, mid, old]


def test_same_second_ties_break_on_id():
    low = _txn(BASE, uuid.UUID(int=1))
    high = _txn(BASE, uuid.UUID(int=2))

    assert sort_newest_first([low, high]) == [high, low]
    assert sort_newest_first([high, low]) == [high, low]


def test_missing_timestamp_sorts_as_oldest():
    undated = _txn(None)
    dated = _txn(BASE)

    assert sort_newest_first([undated, dated]) == [dated, undated]


def test_naive_timestamps_are_read_as_utc():
    naive = _txn(datetime(2026, 3, 1, 11, 0, 0))
    aware = _txn(BASE)

    assert sort_newest_first([aware, naive]) == [naive, aware]


async def test_load_history_returns_only_that_customer_newest_first(db, make_customer, make_transaction):
    asha = await make_customer(name="Asha Rao", phone="9000000001")
    meera = await make_customer(name="Meera Nair", phone="9000000002")
    first = await make_transaction(asha.id, created_at=BASE)
    third = await make_transaction(asha.id, created_at=BASE + timedelta(days=10))
    second = await make_transaction(asha.id, created_at=BASE + timedelta(days=1))
    await make_transaction(meera.id, created_at=BASE + timedelta(days=5), name="Meera Nair", phone="9000000002")

    transactions = await load_history(db, asha.id)

    assert [t.id for t in transactions] == [third.id, second.id, first.id]


async def test_load_history_is_repeatable(db, make_customer, make_transaction):
    asha = await make_customer()
    for offset in range(3):
        await make_transaction(asha.id, created_at=BASE + timedelta(seconds=offset))

    first = [t.id for t in await load_history(db, asha.id)]
    second = [t.id for t in await load_history(db, asha.id)]

    assert first == second


async def test_load_history_for_customer_without_sales(db):
    assert await load_history(db, uuid.uuid4()) == []


async def test_load_history_failure_is_reported(db, monkeypatch):
    async def broken(db, customer_id):
        raise OperationalError("SELECT transactions", {}, Exception("timeout"))

    monkeypatch.setattr(history, "get_transactions_for_customer", broken)

    with pytest.raises(HistoryLoadError):
        await load_history(db, uuid.uuid4())
