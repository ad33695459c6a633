"""Balance replay and per-item audit."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from stockwatch.core.errors import NotFound
from stockwatch.models.deliveries import Delivery, DeliveryLine
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.usage import UsageRecord, UsageType
from stockwatch.schemas.delivery import DeliveryCreate, DeliveryLineCreate
from stockwatch.schemas.usage import ManualUsageCreate, SaleCreate
from stockwatch.schemas.waste import WasteCreate
from stockwatch.services import reconciliation, stock_ledger
from stockwatch.services.reconciliation import Movement, MovementKind, replay_balance


class TestReplayBalance:

    def test_receipts_add_and_outflows_subtract(self):
        movements = [
            Movement(MovementKind.RECEIPT, Decimal("50")),
            Movement(MovementKind.USAGE, Decimal("20")),
            Movement(MovementKind.USAGE, Decimal("5")),
            Movement(MovementKind.WASTE, Decimal("2.5")),
        ]

        assert replay_balance(Decimal("0"), movements) == Decimal("22.5")

    def test_no_movements_returns_opening(self):
        assert replay_balance(Decimal("7"), []) == Decimal("7")

    def test_negative_running_balance_rejected(self):
        movements = [
            Movement(MovementKind.USAGE, Decimal("3")),
            Movement(MovementKind.RECEIPT, Decimal("10")),
        ]

        with pytest.raises(ValueError, match="negative"):
            replay_balance(Decimal("2"), movements)

    def test_non_positive_movement_rejected(self):
        with pytest.raises(ValueError, match="positive"):
            replay_balance(Decimal("5"), [Movement(MovementKind.WASTE, Decimal("0"))])

    def test_receipt_sorts_before_outflow_at_same_instant(self):
        moment = datetime(2026, 3, 1, 9, 30)
        movements = [
            Movement(MovementKind.USAGE, Decimal("4"), moment),
            Movement(MovementKind.RECEIPT, Decimal("4"), moment),
            Movement(MovementKind.WASTE, Decimal("1"), moment - timedelta(minutes=5)),
        ]

        ordered = sorted(movements, key=reconciliation._ordering_key)

        assert [m.kind for m in ordered] == [
            MovementKind.WASTE,
            MovementKind.RECEIPT,
            MovementKind.USAGE,
        ]


class TestAuditItem:

    def test_ledger_history_matches_recorded_balance(self, db, kitchen):
        stock_ledger.record_delivery(
            db,
            DeliveryCreate(
                supplier_id=kitchen.supplier_id,
                delivery_date=date.today(),
                items=[
                    DeliveryLineCreate(
                        item_id=kitchen.flour_id,
                        quantity_received=Decimal("50"),
                        unit_id=kitchen.kg_id,
                    )
                ],
            ),
        )
        stock_ledger.record_manual_usage(
            db,
            ManualUsageCreate(item_id=kitchen.flour_id, quantity_used=Decimal("20"), unit_id=kitchen.kg_id),
        )
        stock_ledger.record_sale(db, kitchen.bread_id, SaleCreate(quantity_sold=10))
        stock_ledger.record_waste(
            db,
            WasteCreate(item_id=kitchen.flour_id, quantity_wasted=Decimal("1.5"), unit_id=kitchen.kg_id),
        )

        audit = reconciliation.audit_item(db, kitchen.flour_id)

        assert audit.opening_quantity == Decimal("0")
        assert audit.total_received == Decimal("50")
        assert audit.total_used == Decimal("25")
        assert audit.total_wasted == Decimal("1.5")
        assert audit.derived_quantity == Decimal("23.5")
        assert audit.recorded_quantity == Decimal("23.5")
        assert audit.in_balance is True

    def test_opening_quantity_is_the_baseline(self, db, kitchen):
        audit = reconciliation.audit_item(db, kitchen.tomato_id)

        assert audit.opening_quantity == Decimal("12")
        assert audit.derived_quantity == Decimal("12")
        assert audit.in_balance is True

    def test_out_of_band_edit_is_detected(self, db, kitchen):
        tomato = db.get(InventoryItem, kitchen.tomato_id)
        tomato.quantity_on_hand = Decimal("15")
        db.commit()

        audit = reconciliation.audit_item(db, kitchen.tomato_id)

        assert audit.in_balance is False
        assert audit.difference == Decimal("3")

    def test_missing_item_is_not_found(self, db, kitchen):
        with pytest.raises(NotFound):
            reconciliation.audit_item(db, 31337)

    def test_history_that_replays_negative_is_reported_not_raised(self, db, kitchen):
        # A usage stamped before the delivery whose stock it consumed
        delivery = Delivery(delivery_date=date(2026, 1, 1))
        db.add(delivery)
        db.flush()
        db.add_all([
            DeliveryLine(
                delivery_id=delivery.id,
                item_id=kitchen.flour_id,
                unit_id=kitchen.kg_id,
                quantity_received=Decimal("5"),
                created_at=datetime(2026, 1, 1, 10, 0),
            ),
            UsageRecord(
                item_id=kitchen.flour_id,
                unit_id=kitchen.kg_id,
                quantity_used=Decimal("3"),
                usage_date=datetime(2026, 1, 1, 9, 0),
                usage_type=UsageType.MANUAL.value,
                created_at=datetime(2026, 1, 1, 9, 0),
            ),
        ])
        db.get(InventoryItem, kitchen.flour_id).quantity_on_hand = Decimal("2")
        db.commit()

        audit = reconciliation.audit_item(db, kitchen.flour_id)

        assert audit.derived_quantity == Decimal("2")
        assert audit.difference == Decimal("0")
        assert audit.in_balance is False
        assert "negative" in audit.replay_error

    def test_decimal_fraction_history_stays_in_balance(self, db, kitchen):
        stock_ledger.record_delivery(
            db,
            DeliveryCreate(
                delivery_date=date.today(),
                items=[
                    DeliveryLineCreate(
                        item_id=kitchen.flour_id,
                        quantity_received=Decimal("1.0"),
                        unit_id=kitchen.kg_id,
                    )
                ],
            ),
        )
        for quantity in ("0.7", "0.2", "0.1"):
            stock_ledger.record_manual_usage(
                db,
                ManualUsageCreate(item_id=kitchen.flour_id, quantity_used=Decimal(quantity), unit_id=kitchen.kg_id),
            )

        audit = reconciliation.audit_item(db, kitchen.flour_id)

        assert audit.recorded_quantity == Decimal("0")
        assert audit.in_balance is True
        assert audit.replay_error is None
