# =========================================================
# BALANCE RECONCILIATION
#
# quantity_on_hand is a materialized running total. The ledger
# rows are the movement history. This module recomputes the
# balance from history so the two can be compared.
# =========================================================

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from sqlalchemy.orm import Session

from stockwatch.core.errors import NotFound
from stockwatch.models.deliveries import DeliveryLine
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.usage import UsageRecord
from stockwatch.models.waste import WasteRecord

logger = logging.getLogger("stockwatch")


class MovementKind(str, enum.Enum):
    RECEIPT = "receipt"
    USAGE = "usage"
    WASTE = "waste"


@dataclass(frozen=True)
class Movement:
    kind: MovementKind
    quantity: Decimal
    occurred_at: datetime | None = None


@dataclass
class ItemAudit:
    item_id: int
    item_name: str
    opening_quantity: Decimal
    total_received: Decimal
    total_used: Decimal
    total_wasted: Decimal
    derived_quantity: Decimal
    recorded_quantity: Decimal
    difference: Decimal
    in_balance: bool
    # Set when the history, in order, cannot be replayed without going negative
    replay_error: str | None = None


def replay_balance(opening: Decimal, movements: Iterable[Movement]) -> Decimal:
    """Apply movements in order to an opening balance.

    Raises ValueError on a non-positive movement or if the running
    balance would drop below zero at any point.
    """
    balance = Decimal(opening)

    for movement in movements:
        if movement.quantity <= 0:
            raise ValueError(f"Movement quantity must be positive: {movement}")

        if movement.kind is MovementKind.RECEIPT:
            balance += movement.quantity
        else:
            balance -= movement.quantity

        if balance < 0:
            raise ValueError(
                f"Balance went negative ({balance}) after {movement.kind.value} "
                f"of {movement.quantity}"
            )

    return balance


def _ordering_key(movement: Movement):
    # Receipts first on timestamp ties so a same-second replay never dips below zero
    priority = 0 if movement.kind is MovementKind.RECEIPT else 1
    return (movement.occurred_at or datetime.min, priority)


def item_movements(db: Session, item_id: int) -> list[Movement]:
    movements = []

    for line in db.query(DeliveryLine).filter(DeliveryLine.item_id == item_id):
        movements.append(
            Movement(MovementKind.RECEIPT, line.quantity_received, line.created_at)
        )

    for usage in db.query(UsageRecord).filter(UsageRecord.item_id == item_id):
        movements.append(
            Movement(MovementKind.USAGE, usage.quantity_used, usage.created_at)
        )

    for waste in db.query(WasteRecord).filter(WasteRecord.item_id == item_id):
        movements.append(
            Movement(MovementKind.WASTE, waste.quantity_wasted, waste.created_at)
        )

    movements.sort(key=_ordering_key)
    return movements


def audit_item(db: Session, item_id: int) -> ItemAudit:
    item = db.get(InventoryItem, item_id)
    if item is None:
        raise NotFound("Inventory item not found")

    movements = item_movements(db, item_id)

    def _total(kind: MovementKind) -> Decimal:
        return sum(
            (m.quantity for m in movements if m.kind is kind),
            Decimal("0"),
        )

    opening = Decimal(item.opening_quantity)
    recorded = Decimal(item.quantity_on_hand)
    received = _total(MovementKind.RECEIPT)
    used = _total(MovementKind.USAGE)
    wasted = _total(MovementKind.WASTE)

    derived = opening + received - used - wasted
    difference = recorded - derived

    replay_error = None
    try:
        replay_balance(opening, movements)
    except ValueError as exc:
        replay_error = str(exc)
        logger.warning(f"Ledger history of item {item.id} does not replay: {exc}")

    return ItemAudit(
        item_id=item.id,
        item_name=item.name,
        opening_quantity=opening,
        total_received=received,
        total_used=used,
        total_wasted=wasted,
        derived_quantity=derived,
        recorded_quantity=recorded,
        difference=difference,
        in_balance=difference == 0 and replay_error is None,
        replay_error=replay_error,
    )
