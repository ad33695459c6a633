"""Read-only report projections."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from stockwatch.core.errors import ValidationError
from stockwatch.models.usage import UsageType
from stockwatch.schemas.delivery import DeliveryCreate, DeliveryLineCreate
from stockwatch.schemas.usage import ManualUsageCreate, SaleCreate
from stockwatch.schemas.waste import WasteCreate
from stockwatch.services import reporting, stock_ledger

TODAY = date(2026, 5, 10)


def _deliver(db, kitchen, item_id, quantity, expiration_date=None):
    stock_ledger.record_delivery(
        db,
        DeliveryCreate(
            supplier_id=kitchen.supplier_id,
            delivery_date=TODAY,
            items=[
                DeliveryLineCreate(
                    item_id=item_id,
                    quantity_received=Decimal(quantity),
                    unit_id=kitchen.kg_id,
                    expiration_date=expiration_date,
                )
            ],
        ),
    )


class TestLowStock:

    def test_item_at_or_below_reorder_point_is_listed(self, db, kitchen):
        _deliver(db, kitchen, kitchen.flour_id, "30")

        rows = reporting.low_stock(db)

        flour = next(row for row in rows if row["item_id"] == kitchen.flour_id)
        assert flour["quantity_on_hand"] == Decimal("30")
        assert flour["reorder_point"] == Decimal("40")
        assert flour["shortfall"] == Decimal("10")
        assert flour["unit_abbreviation"] == "kg"

    def test_items_above_reorder_point_or_without_one_are_excluded(self, db, kitchen):
        rows = reporting.low_stock(db)

        ids = {row["item_id"] for row in rows}
        assert kitchen.tomato_id not in ids  # 12 > 5
        assert kitchen.whisk_id not in ids   # reorder point 0

    def test_boundary_is_inclusive(self, db, kitchen):
        _deliver(db, kitchen, kitchen.flour_id, "40")

        assert [row["item_id"] for row in reporting.low_stock(db)] == [kitchen.flour_id]

    def test_reads_do_not_change_state(self, db, kitchen):
        _deliver(db, kitchen, kitchen.flour_id, "12")

        assert reporting.low_stock(db) == reporting.low_stock(db)


class TestExpirations:

    def test_window_includes_lines_expiring_soon(self, db, kitchen):
        _deliver(db, kitchen, kitchen.tomato_id, "3", TODAY + timedelta(days=2))
        _deliver(db, kitchen, kitchen.tomato_id, "3", TODAY + timedelta(days=30))

        rows = reporting.expirations(db, days=7, today=TODAY)

        assert len(rows) == 1
        assert rows[0]["days_until_expiration"] == 2
        assert rows[0]["supplier_name"] == "Mill & Co"

    def test_past_due_lines_can_be_excluded(self, db, kitchen):
        _deliver(db, kitchen, kitchen.tomato_id, "1", TODAY - timedelta(days=1))
        _deliver(db, kitchen, kitchen.tomato_id, "1", TODAY)

        with_past = reporting.expirations(db, days=0, today=TODAY)
        without_past = reporting.expirations(db, days=0, include_past_due=False, today=TODAY)

        assert [row["days_until_expiration"] for row in with_past] == [-1, 0]
        assert [row["days_until_expiration"] for row in without_past] == [0]

    def test_lines_without_expiry_are_ignored(self, db, kitchen):
        _deliver(db, kitchen, kitchen.flour_id, "5")

        assert reporting.expirations(db, days=365, today=TODAY) == []

    def test_negative_window_rejected(self, db, kitchen):
        with pytest.raises(ValidationError):
            reporting.expirations(db, days=-1, today=TODAY)


class TestHistory:

    def test_waste_history_filters_by_item_and_date(self, db, kitchen):
        for waste_date, quantity in ((TODAY - timedelta(days=3), "1"), (TODAY, "2")):
            stock_ledger.record_waste(
                db,
                WasteCreate(
                    item_id=kitchen.tomato_id,
                    quantity_wasted=Decimal(quantity),
                    unit_id=kitchen.kg_id,
                    waste_date=waste_date,
                    reason="spoiled",
                ),
            )

        rows = reporting.waste_history(db, item_id=kitchen.tomato_id, start_date=TODAY)

        assert len(rows) == 1
        assert rows[0]["quantity_wasted"] == Decimal("2")
        assert rows[0]["item_name"] == "Tomato"

        assert len(reporting.waste_history(db)) == 2
        assert reporting.waste_history(db, item_id=kitchen.flour_id) == []

    def test_inverted_date_range_rejected(self, db, kitchen):
        with pytest.raises(ValidationError):
            reporting.waste_history(db, start_date=TODAY, end_date=TODAY - timedelta(days=1))

    def test_usage_history_filters_by_type(self, db, kitchen):
        _deliver(db, kitchen, kitchen.flour_id, "10")
        when = datetime(2026, 5, 10, 12, 0, tzinfo=timezone.utc)
        stock_ledger.record_manual_usage(
            db,
            ManualUsageCreate(
                item_id=kitchen.flour_id,
                quantity_used=Decimal("1"),
                unit_id=kitchen.kg_id,
                usage_date=when,
            ),
        )
        stock_ledger.record_sale(db, kitchen.bread_id, SaleCreate(quantity_sold=2, usage_date=when))

        sales = reporting.usage_history(db, usage_type=UsageType.SALE)
        manual = reporting.usage_history(db, usage_type=UsageType.MANUAL)

        assert len(sales) == 1
        assert sales[0]["menu_item_name"] == "Bread"
        assert sales[0]["quantity_used"] == Decimal("1")
        assert len(manual) == 1
        assert manual[0]["menu_item_id"] is None

        same_day = reporting.usage_history(db, start_date=TODAY, end_date=TODAY)
        assert len(same_day) == 2
