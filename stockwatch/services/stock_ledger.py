# =========================================================
# STOCK LEDGER
#
# The only code allowed to move InventoryItem.quantity_on_hand
# once an item exists. Every balance change is paired, in the
# same transaction, with the ledger row that explains it:
#
# - record_delivery      -> DeliveryLine  (increase)
# - record_manual_usage  -> UsageRecord   (decrease, type manual)
# - record_sale          -> UsageRecord   (decrease per ingredient, type sale)
# - record_waste         -> WasteRecord   (decrease)
#
# Decreases are a single conditional UPDATE guarded by
# quantity_on_hand >= requested, so two concurrent deductions
# can never both pass a stale balance check.
# =========================================================

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from stockwatch.core.errors import (
    InsufficientStock,
    InvalidReference,
    StockError,
    TransactionFailure,
    ValidationError,
)
from stockwatch.models.deliveries import Delivery, DeliveryLine
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.menu import MenuItem, RecipeIngredient
from stockwatch.models.suppliers import Supplier
from stockwatch.models.units import UnitOfMeasure
from stockwatch.models.usage import UsageRecord, UsageType
from stockwatch.models.waste import WasteRecord
from stockwatch.schemas.delivery import DeliveryCreate
from stockwatch.schemas.usage import ManualUsageCreate, SaleCreate
from stockwatch.schemas.waste import WasteCreate

logger = logging.getLogger("stockwatch")

# Scale and ceiling of the Numeric(12, 3) quantity columns
QUANTITY_SCALE = 3
MAX_QUANTITY = Decimal("999999999.999")


@dataclass
class UsageResult:
    usage_record: UsageRecord
    updated_item: InventoryItem


@dataclass
class WasteResult:
    waste_record: WasteRecord
    updated_item: InventoryItem


@dataclass
class DeductedItem:
    item_id: int
    item_name: str
    quantity_deducted: Decimal
    quantity_on_hand: Decimal


@dataclass
class SaleSummary:
    message: str
    menu_item_id: int
    quantity_sold: int
    deducted_items: list[DeductedItem] = field(default_factory=list)
    usage_records: list[UsageRecord] = field(default_factory=list)


# =========================================================
# SHARED HELPERS
# =========================================================
@contextmanager
def _ledger_transaction(db: Session, operation: str):
    """Commit on success, roll back on any failure.

    Domain errors propagate unchanged; store errors become TransactionFailure.
    """
    try:
        yield
        db.commit()

    except StockError:
        db.rollback()
        raise

    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"{operation} failed, transaction rolled back")
        raise TransactionFailure(f"Unable to record {operation}") from exc


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_positive(value, field_name: str):
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")


def _require_unit(db: Session, unit_id: int) -> UnitOfMeasure:
    unit = db.get(UnitOfMeasure, unit_id)
    if unit is None:
        raise InvalidReference(f"Unit of measure {unit_id} not found")
    return unit


def _fresh_item(db: Session, item_id: int) -> InventoryItem | None:
    # Bulk updates bypass the identity map, so re-read the row
    return (
        db.query(InventoryItem)
        .populate_existing()
        .filter(InventoryItem.id == item_id)
        .first()
    )


def _warn_on_unit_mismatch(item: InventoryItem, unit_id: int):
    # No unit conversion: quantities are applied as given
    if item.unit_id != unit_id:
        logger.warning(
            f"Unit {unit_id} differs from stocking unit {item.unit_id} "
            f"for item {item.id} ({item.name}); quantity applied without conversion"
        )


def _increase_stock(db: Session, item_id: int, quantity: Decimal) -> InventoryItem:
    updated = (
        db.query(InventoryItem)
        .filter(InventoryItem.id == item_id)
        .update(
            {
                InventoryItem.quantity_on_hand: func.round(
                    InventoryItem.quantity_on_hand + quantity, QUANTITY_SCALE
                )
            },
            synchronize_session=False,
        )
    )

    if updated == 0:
        raise InvalidReference(f"Inventory item {item_id} not found")

    return _fresh_item(db, item_id)


def _decrease_stock(db: Session, item_id: int, quantity: Decimal) -> InventoryItem:
    # Rounded in SQL so binary-float stores (SQLite) compare at column scale
    remaining = func.round(InventoryItem.quantity_on_hand - quantity, QUANTITY_SCALE)

    updated = (
        db.query(InventoryItem)
        .filter(
            InventoryItem.id == item_id,
            remaining >= 0,
        )
        .update(
            {InventoryItem.quantity_on_hand: remaining},
            synchronize_session=False,
        )
    )

    item = _fresh_item(db, item_id)

    if updated == 0:
        if item is None:
            raise InvalidReference(f"Inventory item {item_id} not found")

        logger.warning(
            f"Insufficient stock for item {item.id} ({item.name}): "
            f"requested {quantity}, available {item.quantity_on_hand}"
        )
        raise InsufficientStock(
            item_id=item.id,
            item_name=item.name,
            requested=quantity,
            available=item.quantity_on_hand,
        )

    return item


# =========================================================
# RECORD DELIVERY
# =========================================================
def record_delivery(db: Session, delivery_data: DeliveryCreate) -> Delivery:
    if not delivery_data.items:
        raise ValidationError("Delivery must contain at least one item")

    for line in delivery_data.items:
        _require_positive(line.quantity_received, "quantity_received")
        if line.unit_cost is not None and line.unit_cost < 0:
            raise ValidationError("unit_cost cannot be negative")

    with _ledger_transaction(db, "delivery"):
        if delivery_data.supplier_id is not None:
            if db.get(Supplier, delivery_data.supplier_id) is None:
                raise InvalidReference(
                    f"Supplier {delivery_data.supplier_id} not found"
                )

        delivery = Delivery(
            supplier_id=delivery_data.supplier_id,
            delivery_date=delivery_data.delivery_date,
            invoice_number=delivery_data.invoice_number,
        )
        db.add(delivery)
        db.flush()

        for position, line in enumerate(delivery_data.items, start=1):
            _require_unit(db, line.unit_id)

            try:
                item = _increase_stock(db, line.item_id, line.quantity_received)
            except InvalidReference as exc:
                raise InvalidReference(f"Line {position}: {exc.detail}") from exc

            _warn_on_unit_mismatch(item, line.unit_id)

            db.add(
                DeliveryLine(
                    delivery_id=delivery.id,
                    item_id=line.item_id,
                    unit_id=line.unit_id,
                    quantity_received=line.quantity_received,
                    unit_cost=line.unit_cost,
                    expiration_date=line.expiration_date,
                )
            )

        db.flush()
        delivery_id = delivery.id

    logger.info(
        f"Delivery {delivery_id} recorded with {len(delivery_data.items)} line(s)"
    )

    return get_delivery(db, delivery_id)


def get_delivery(db: Session, delivery_id: int) -> Delivery | None:
    return (
        db.query(Delivery)
        .options(
            joinedload(Delivery.supplier),
            joinedload(Delivery.lines).joinedload(DeliveryLine.item),
            joinedload(Delivery.lines).joinedload(DeliveryLine.unit),
        )
        .filter(Delivery.id == delivery_id)
        .first()
    )


# =========================================================
# RECORD MANUAL USAGE
# =========================================================
def record_manual_usage(db: Session, usage_data: ManualUsageCreate) -> UsageResult:
    _require_positive(usage_data.quantity_used, "quantity_used")

    with _ledger_transaction(db, "manual usage"):
        _require_unit(db, usage_data.unit_id)

        item = _decrease_stock(db, usage_data.item_id, usage_data.quantity_used)
        _warn_on_unit_mismatch(item, usage_data.unit_id)

        usage = UsageRecord(
            item_id=item.id,
            unit_id=usage_data.unit_id,
            quantity_used=usage_data.quantity_used,
            usage_date=usage_data.usage_date or _utcnow(),
            usage_type=UsageType.MANUAL.value,
        )
        db.add(usage)
        db.flush()

    logger.info(
        f"Manual usage recorded: item {usage_data.item_id} "
        f"-{usage_data.quantity_used}"
    )

    return UsageResult(usage_record=usage, updated_item=item)


# =========================================================
# RECORD SALE (RECIPE EXPANSION)
# =========================================================
def record_sale(db: Session, menu_item_id: int, sale_data: SaleCreate) -> SaleSummary:
    _require_positive(sale_data.quantity_sold, "quantity_sold")

    quantity_sold = sale_data.quantity_sold
    usage_date = sale_data.usage_date or _utcnow()

    with _ledger_transaction(db, "sale"):
        menu_item = db.get(MenuItem, menu_item_id)
        if menu_item is None:
            raise InvalidReference(f"Menu item {menu_item_id} not found")

        # Fixed item order keeps concurrent sales from deadlocking on row locks
        ingredients = (
            db.query(RecipeIngredient)
            .filter(RecipeIngredient.menu_item_id == menu_item_id)
            .order_by(RecipeIngredient.item_id)
            .all()
        )

        summary = SaleSummary(
            message="",
            menu_item_id=menu_item.id,
            quantity_sold=quantity_sold,
        )

        if not ingredients:
            logger.warning(
                f"Menu item {menu_item.id} ({menu_item.name}) has no recipe; "
                f"sale logged without stock deduction"
            )
            usage = UsageRecord(
                item_id=None,
                unit_id=None,
                quantity_used=Decimal(quantity_sold),
                usage_date=usage_date,
                usage_type=UsageType.SALE.value,
                menu_item_id=menu_item.id,
            )
            db.add(usage)
            summary.usage_records.append(usage)
            summary.message = (
                f"Sale of {quantity_sold} x '{menu_item.name}' recorded. "
                f"No recipe defined, no stock deducted."
            )

        else:
            for ingredient in ingredients:
                deduction = ingredient.quantity_required * quantity_sold
                if deduction > MAX_QUANTITY:
                    raise ValidationError(
                        f"Sale of {quantity_sold} needs {deduction} of item "
                        f"{ingredient.item_id}, above the largest storable quantity"
                    )


                item = _decrease_stock(db, ingredient.item_id, deduction)
                _warn_on_unit_mismatch(item, ingredient.unit_id)

                usage = UsageRecord(
                    item_id=item.id,
                    unit_id=ingredient.unit_id,
                    quantity_used=deduction,
                    usage_date=usage_date,
                    usage_type=UsageType.SALE.value,
                    menu_item_id=menu_item.id,
                )
                db.add(usage)
                summary.usage_records.append(usage)
                summary.deducted_items.append(
                    DeductedItem(
                        item_id=item.id,
                        item_name=item.name,
                        quantity_deducted=deduction,
                        quantity_on_hand=item.quantity_on_hand,
                    )
                )

            summary.message = (
                f"Sale of {quantity_sold} x '{menu_item.name}' recorded. "
                f"{len(ingredients)} ingredient(s) deducted."
            )

        db.flush()

    logger.info(summary.message)

    return summary


# =========================================================
# RECORD WASTE
# =========================================================
def record_waste(db: Session, waste_data: WasteCreate) -> WasteResult:
    _require_positive(waste_data.quantity_wasted, "quantity_wasted")

    with _ledger_transaction(db, "waste"):
        _require_unit(db, waste_data.unit_id)

        item = _decrease_stock(db, waste_data.item_id, waste_data.quantity_wasted)
        _warn_on_unit_mismatch(item, waste_data.unit_id)

        waste = WasteRecord(
            item_id=item.id,
            unit_id=waste_data.unit_id,
            quantity_wasted=waste_data.quantity_wasted,
            waste_date=waste_data.waste_date or _utcnow().date(),
            reason=waste_data.reason,
        )
        db.add(waste)
        db.flush()

    logger.info(
        f"Waste recorded: item {waste_data.item_id} -{waste_data.quantity_wasted}"
    )

    return WasteResult(waste_record=waste, updated_item=item)
