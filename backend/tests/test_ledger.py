import logging
import random
from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import OperationalError

from stockroom.core.database import INT_MAX
from stockroom.core.errors import NotFoundError, StorageError, ValidationError
from stockroom.models import Sku, Transaction, TransactionType
from stockroom.services.filters import TransactionFilter
from stockroom.services.ledger import TransactionLedger

MOVEMENTS = [
    ("PURCHASE", 10),
    ("SALE", 4),
    ("DAMAGE", 2),
    ("RETURN", 1),
    ("SALE", 7),
    ("PURCHASE", 3),
]


def expected_quantity(q0, movements):
    incoming = sum(q for t, q in movements if t in ("PURCHASE", "RETURN"))
    outgoing = sum(q for t, q in movements if t in ("SALE", "DAMAGE"))
    return q0 + incoming - outgoing


@pytest.mark.parametrize(
    "tx_type,direction",
    [("PURCHASE", 1), ("RETURN", 1), ("SALE", -1), ("DAMAGE", -1)],
)
def test_type_direction(tx_type, direction):
    assert TransactionType(tx_type).direction == direction


def test_purchase_adds_stock(ledger, registry, make_sku):
    sku = make_sku(current_quantity=5)

    row = ledger.record(sku.id, "PURCHASE", 10)

    assert row["quantity"] == 10
    assert row["transaction_type"] == "PURCHASE"
    assert row["new_quantity"] == 15
    assert row["sku_name"] == sku.name
    assert row["sku_category"] == sku.category
    assert registry.get(sku.id).current_quantity == 15


def test_sale_may_go_negative(ledger, registry, make_sku, caplog):
    sku = make_sku(current_quantity=5)

    with caplog.at_level(logging.WARNING, logger="stockroom.services.ledger"):
        row = ledger.record(sku.id, "SALE", 10)

    assert row["new_quantity"] == -5
    assert registry.get(sku.id).current_quantity == -5
    assert "going negative" in caplog.text


def test_quantity_is_order_independent(ledger, registry, make_sku):
    q0 = 20
    orders = [list(MOVEMENTS), list(reversed(MOVEMENTS))]
    shuffled = list(MOVEMENTS)
    random.Random(7).shuffle(shuffled)
    orders.append(shuffled)

    for i, movements in enumerate(orders):
        sku = make_sku(name=f"Tile {i}", current_quantity=q0)
        for tx_type, qty in movements:
            ledger.record(sku.id, tx_type, qty)
        assert registry.get(sku.id).current_quantity == expected_quantity(q0, MOVEMENTS)


def test_empty_reason_and_notes_stored_as_null(ledger, make_sku):
    sku = make_sku(current_quantity=1)
    row = ledger.record(sku.id, "RETURN", 1, reason="", notes="")
    assert row["reason"] is None
    assert row["notes"] is None


@pytest.mark.parametrize("tx_type", ["TRANSFER", "sale", "", None])
def test_invalid_type_rejected(ledger, make_sku, tx_type):
    sku = make_sku()
    with pytest.raises(ValidationError) as exc:
        ledger.record(sku.id, tx_type, 1)
    assert "PURCHASE, SALE, DAMAGE, RETURN" in exc.value.message


@pytest.mark.parametrize("qty", [0, -3, 1.5, True])
def test_non_positive_quantity_rejected(ledger, make_sku, qty):
    sku = make_sku()
    with pytest.raises(ValidationError):
        ledger.record(sku.id, "PURCHASE", qty)


def test_unknown_sku(ledger):
    with pytest.raises(NotFoundError):
        ledger.record(999, "PURCHASE", 1)


def test_validation_happens_before_write(ledger, session, make_sku):
    sku = make_sku(current_quantity=3)
    with pytest.raises(ValidationError):
        ledger.record(sku.id, "PURCHASE", 0)

    assert session.scalar(select(func.count(Transaction.id))) == 0
    assert session.get(Sku, sku.id).current_quantity == 3


def test_failed_commit_leaves_nothing_behind(database, session, ledger, make_sku, monkeypatch):
    sku = make_sku(current_quantity=5)

    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", broken_commit)
    with pytest.raises(StorageError) as exc:
        ledger.record(sku.id, "PURCHASE", 10)
    monkeypatch.undo()

    # no driver details leak into the public message
    assert "disk" not in exc.value.message

    check = database.session()
    try:
        assert check.get(Sku, sku.id).current_quantity == 5
        assert check.scalar(select(func.count(Transaction.id))) == 0
    finally:
        check.close()


def test_list_newest_first_with_sku_columns(ledger, make_sku):
    sku = make_sku(current_quantity=100)
    now = datetime.utcnow()
    ledger.record(sku.id, "SALE", 1, created_at=now - timedelta(days=3))
    ledger.record(sku.id, "SALE", 2, created_at=now - timedelta(days=1))
    ledger.record(sku.id, "SALE", 3, created_at=now - timedelta(days=2))

    rows = ledger.list()

    assert [r["quantity"] for r in rows] == [2, 3, 1]
    assert all(r["sku_name"] == sku.name for r in rows)


def test_list_filters(ledger, make_sku):
    a = make_sku(name="A", current_quantity=50)
    b = make_sku(name="B", current_quantity=50)
    ledger.record(a.id, "SALE", 1)
    ledger.record(a.id, "PURCHASE", 2)
    ledger.record(b.id, "SALE", 3)

    by_sku = ledger.list(TransactionFilter(sku_id=a.id))
    assert {r["quantity"] for r in by_sku} == {1, 2}

    sales_of_a = ledger.list(TransactionFilter(sku_id=a.id, transaction_type="SALE"))
    assert [r["quantity"] for r in sales_of_a] == [1]


def test_list_date_range_inclusive(ledger, make_sku):
    sku = make_sku(current_quantity=50)
    ledger.record(sku.id, "SALE", 1, created_at=datetime(2024, 12, 20, 9, 0))
    ledger.record(sku.id, "SALE", 2, created_at=datetime(2024, 12, 25, 23, 30))
    ledger.record(sku.id, "SALE", 3, created_at=datetime(2024, 12, 26, 0, 0))

    rows = ledger.list(
        TransactionFilter(start_date=date(2024, 12, 20), end_date=date(2024, 12, 25))
    )
    assert sorted(r["quantity"] for r in rows) == [1, 2]


def test_list_limit(ledger, make_sku):
    sku = make_sku(current_quantity=50)
    for _ in range(5):
        ledger.record(sku.id, "SALE", 1)

    assert len(ledger.list(TransactionFilter(limit=3))) == 3
    assert len(ledger.list(TransactionFilter(limit=0))) == 1


def test_quantity_above_column_range_rejected(ledger, session, make_sku):
    sku = make_sku(current_quantity=5)

    with pytest.raises(ValidationError):
        ledger.record(sku.id, "PURCHASE", INT_MAX + 1)

    assert session.scalar(select(func.count()).select_from(Transaction)) == 0


def test_out_of_range_sku_id_is_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.record(10**20, "PURCHASE", 1)


def test_overlapping_records_both_apply(database, session, ledger, make_sku):
    sku = make_sku(current_quantity=5)
    sku_id = sku.id
    fired = []

    # a second session records against the same SKU after this one has
    # loaded the row but before it writes
    def record_elsewhere(s, flush_context, instances):
        if fired:
            return
        fired.append(True)
        other = database.session()
        try:
            TransactionLedger(other).record(sku_id, "PURCHASE", 10)
        finally:
            other.close()

    event.listen(session, "before_flush", record_elsewhere)
    try:
        row = ledger.record(sku_id, "PURCHASE", 10)
    finally:
        event.remove(session, "before_flush", record_elsewhere)

    assert fired
    assert row["new_quantity"] == 25

    fresh = database.session()
    try:
        assert fresh.get(Sku, sku_id).current_quantity == 25
        assert fresh.scalar(select(func.count()).select_from(Transaction)) == 2
    finally:
        fresh.close()
