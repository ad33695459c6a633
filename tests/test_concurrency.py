"""Two deductions racing for the same stock must never overdraw it."""

import threading
from decimal import Decimal

import pytest

from stockwatch.core.errors import InsufficientStock, StockError, TransactionFailure
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.usage import UsageRecord
from stockwatch.schemas.usage import ManualUsageCreate
from stockwatch.services import stock_ledger


def test_concurrent_deductions_cannot_both_pass(session_factory, kitchen):
    # Tomato holds 12; two cooks each take 7
    barrier = threading.Barrier(2)
    outcomes = []
    lock = threading.Lock()

    def take_tomatoes():
        session = session_factory()
        try:
            barrier.wait()
            stock_ledger.record_manual_usage(
                session,
                ManualUsageCreate(
                    item_id=kitchen.tomato_id,
                    quantity_used=Decimal("7"),
                    unit_id=kitchen.kg_id,
                ),
            )
            result = "ok"
        except StockError as exc:
            result = exc
        finally:
            session.close()

        with lock:
            outcomes.append(result)

    workers = [threading.Thread(target=take_tomatoes) for _ in range(2)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join(timeout=30)

    assert len(outcomes) == 2
    assert outcomes.count("ok") == 1

    failure = next(outcome for outcome in outcomes if outcome != "ok")
    # The loser either sees the committed balance or loses the write lock
    assert isinstance(failure, (InsufficientStock, TransactionFailure))

    check = session_factory()
    try:
        tomato = check.get(InventoryItem, kitchen.tomato_id)
        assert Decimal(tomato.quantity_on_hand) == Decimal("5")
        assert check.query(UsageRecord).count() == 1
    finally:
        check.close()


def test_sequential_deductions_stop_at_zero(db, kitchen):
    for _ in range(3):
        stock_ledger.record_manual_usage(
            db,
            ManualUsageCreate(item_id=kitchen.whisk_id, quantity_used=Decimal("1"), unit_id=kitchen.kg_id),
        )

    with pytest.raises(InsufficientStock) as exc_info:
        stock_ledger.record_manual_usage(
            db,
            ManualUsageCreate(item_id=kitchen.whisk_id, quantity_used=Decimal("1"), unit_id=kitchen.kg_id),
        )

    assert exc_info.value.available == Decimal("0")

    db.expire_all()
    assert Decimal(db.get(InventoryItem, kitchen.whisk_id).quantity_on_hand) == Decimal("0")
