# stockwatch/routers/items.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from stockwatch.database import get_db
from stockwatch.models.inventory import InventoryItem
from stockwatch.schemas.item import (
    ItemAuditResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)
from stockwatch.services import catalog, reconciliation

router = APIRouter(
    prefix="/items",
    tags=["Inventory Items"],
)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(item_data: ItemCreate, db: Session = Depends(get_db)):
    return catalog.create_item(db, item_data)


@router.get("", response_model=list[ItemResponse])
def list_items(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None, gt=0),
):
    query = db.query(InventoryItem).options(
        joinedload(InventoryItem.category),
        joinedload(InventoryItem.unit),
        joinedload(InventoryItem.perishable),
        joinedload(InventoryItem.non_perishable),
        joinedload(InventoryItem.tool),
    )

    if category_id is not None:
        query = query.filter(InventoryItem.category_id == category_id)

    return query.order_by(InventoryItem.id.asc()).all()


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return catalog.get_item(db, item_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    item_data: ItemUpdate,
    db: Session = Depends(get_db),
):
    return catalog.update_item(db, item_id, item_data)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    catalog.delete_item(db, item_id)
    return None


# =========================================================
# BALANCE AUDIT
# Recomputes quantity_on_hand from the ledger and compares
# =========================================================
@router.get("/{item_id}/audit", response_model=ItemAuditResponse)
def audit_item(item_id: int, db: Session = Depends(get_db)):
    audit = reconciliation.audit_item(db, item_id)
    return ItemAuditResponse.model_validate(audit)
