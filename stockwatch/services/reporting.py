# =========================================================
# REPORTING (READ ONLY)
#
# Projections over master data and the ledger tables:
# - Low stock     (quantity_on_hand <= reorder_point)
# - Expirations   (delivery lines expiring within a window)
# - Waste history
# - Usage history
# =========================================================

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from stockwatch.core.errors import ValidationError
from stockwatch.models.deliveries import Delivery, DeliveryLine
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.usage import UsageRecord, UsageType
from stockwatch.models.waste import WasteRecord


def _today() -> date:
    return datetime.now(timezone.utc).date()


def _check_range(start_date: Optional[date], end_date: Optional[date]):
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must be on or before end_date")


# =========================================================
# LOW STOCK
# =========================================================
def low_stock(db: Session) -> list[dict]:
    items = (
        db.query(InventoryItem)
        .options(
            joinedload(InventoryItem.unit),
            joinedload(InventoryItem.category),
        )
        .filter(
            InventoryItem.reorder_point > 0,
            InventoryItem.quantity_on_hand <= InventoryItem.reorder_point,
        )
        .order_by(InventoryItem.name.asc())
        .all()
    )

    return [
        {
            "item_id": item.id,
            "item_name": item.name,
            "category_name": item.category.name,
            "quantity_on_hand": Decimal(item.quantity_on_hand),
            "reorder_point": Decimal(item.reorder_point),
            "shortfall": Decimal(item.reorder_point) - Decimal(item.quantity_on_hand),
            "unit_abbreviation": item.unit.abbreviation,
        }
        for item in items
    ]


# =========================================================
# EXPIRATIONS
# =========================================================
def expirations(
    db: Session,
    days: int = 7,
    include_past_due: bool = True,
    today: Optional[date] = None,
) -> list[dict]:
    if days < 0:
        raise ValidationError("days must be a non-negative number")

    today = today or _today()
    target_date = today + timedelta(days=days)

    query = (
        db.query(DeliveryLine)
        .join(Delivery, DeliveryLine.delivery_id == Delivery.id)
        .join(InventoryItem, DeliveryLine.item_id == InventoryItem.id)
        .options(
            joinedload(DeliveryLine.delivery).joinedload(Delivery.supplier),
            joinedload(DeliveryLine.item),
            joinedload(DeliveryLine.unit),
        )
        .filter(
            DeliveryLine.expiration_date.isnot(None),
            DeliveryLine.expiration_date <= target_date,
        )
    )

    if not include_past_due:
        query = query.filter(DeliveryLine.expiration_date >= today)

    lines = (
        query
        .order_by(DeliveryLine.expiration_date.asc(), InventoryItem.name.asc())
        .all()
    )

    results = []

    for line in lines:
        supplier = line.delivery.supplier
        results.append({
            "delivery_line_id": line.id,
            "delivery_id": line.delivery_id,
            "delivery_date": line.delivery.delivery_date,
            "supplier_name": supplier.name if supplier else None,
            "item_id": line.item_id,
            "item_name": line.item.name,
            "quantity_received": Decimal(line.quantity_received),
            "unit_abbreviation": line.unit.abbreviation,
            "expiration_date": line.expiration_date,
            "days_until_expiration": (line.expiration_date - today).days,
        })

    return results


# =========================================================
# WASTE HISTORY
# =========================================================
def waste_history(
    db: Session,
    item_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[dict]:
    _check_range(start_date, end_date)

    query = db.query(WasteRecord).options(
        joinedload(WasteRecord.item),
        joinedload(WasteRecord.unit),
    )

    if item_id is not None:
        query = query.filter(WasteRecord.item_id == item_id)
    if start_date is not None:
        query = query.filter(WasteRecord.waste_date >= start_date)
    if end_date is not None:
        query = query.filter(WasteRecord.waste_date <= end_date)

    records = query.order_by(WasteRecord.waste_date.desc(), WasteRecord.id.desc()).all()

    return [
        {
            "waste_id": record.id,
            "item_id": record.item_id,
            "item_name": record.item.name,
            "quantity_wasted": Decimal(record.quantity_wasted),
            "unit_abbreviation": record.unit.abbreviation,
            "waste_date": record.waste_date,
            "reason": record.reason,
        }
        for record in records
    ]


# =========================================================
# USAGE HISTORY
# =========================================================
def usage_history(
    db: Session,
    usage_type: Optional[UsageType] = None,
    item_id: Optional[int] = None,
    menu_item_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[dict]:
    _check_range(start_date, end_date)

    query = db.query(UsageRecord).options(
        joinedload(UsageRecord.item),
        joinedload(UsageRecord.unit),
        joinedload(UsageRecord.menu_item),
    )

    if usage_type is not None:
        query = query.filter(UsageRecord.usage_type == UsageType(usage_type).value)
    if item_id is not None:
        query = query.filter(UsageRecord.item_id == item_id)
    if menu_item_id is not None:
        query = query.filter(UsageRecord.menu_item_id == menu_item_id)
    if start_date is not None:
        query = query.filter(
            UsageRecord.usage_date >= datetime.combine(start_date, time.min)
        )
    if end_date is not None:
        query = query.filter(
            UsageRecord.usage_date <= datetime.combine(end_date, time.max)
        )

    records = query.order_by(UsageRecord.usage_date.desc(), UsageRecord.id.desc()).all()

    return [
        {
            "usage_id": record.id,
            "usage_type": record.usage_type,
            "item_id": record.item_id,
            "item_name": record.item.name if record.item else None,
            "quantity_used": Decimal(record.quantity_used),
            "unit_abbreviation": record.unit.abbreviation if record.unit else None,
            "usage_date": record.usage_date,
            "menu_item_id": record.menu_item_id,
            "menu_item_name": record.menu_item.name if record.menu_item else None,
        }
        for record in records
    ]
