# stockwatch/routers/supplier_items.py

from decimal import Decimal

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from stockwatch.core.errors import Conflict, InvalidReference, NotFound
from stockwatch.database import get_db
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.suppliers import SupplierItem
from stockwatch.routers.suppliers import get_supplier_or_404
from stockwatch.schemas.supplier import (
    SupplierItemCreate,
    SupplierItemResponse,
    SupplierItemUpdate,
)
from stockwatch.services.catalog import commit_or_conflict

router = APIRouter(
    prefix="/suppliers/{supplier_id}/items",
    tags=["Supplier Items"],
)


def _to_response(link: SupplierItem) -> SupplierItemResponse:
    return SupplierItemResponse(
        supplier_id=link.supplier_id,
        item_id=link.item_id,
        item_name=link.item.name,
        item_type=link.item.item_type,
        unit_abbreviation=link.item.unit.abbreviation,
        cost=Decimal(link.cost),
        created_at=link.created_at,
    )


def _get_link(db: Session, supplier_id: int, item_id: int) -> SupplierItem:
    link = (
        db.query(SupplierItem)
        .options(joinedload(SupplierItem.item).joinedload(InventoryItem.unit))
        .filter(
            SupplierItem.supplier_id == supplier_id,
            SupplierItem.item_id == item_id,
        )
        .first()
    )

    if not link:
        raise NotFound("Item not found for this supplier")

    return link


@router.get("", response_model=list[SupplierItemResponse])
def list_supplier_items(supplier_id: int, db: Session = Depends(get_db)):
    get_supplier_or_404(db, supplier_id)

    links = (
        db.query(SupplierItem)
        .join(InventoryItem, SupplierItem.item_id == InventoryItem.id)
        .options(joinedload(SupplierItem.item).joinedload(InventoryItem.unit))
        .filter(SupplierItem.supplier_id == supplier_id)
        .order_by(InventoryItem.name.asc())
        .all()
    )

    return [_to_response(link) for link in links]


@router.post("", response_model=SupplierItemResponse, status_code=status.HTTP_201_CREATED)
def add_supplier_item(
    supplier_id: int,
    link_data: SupplierItemCreate,
    db: Session = Depends(get_db),
):
    get_supplier_or_404(db, supplier_id)

    if db.get(InventoryItem, link_data.item_id) is None:
        raise InvalidReference(f"Inventory item {link_data.item_id} not found")

    existing = db.get(SupplierItem, (supplier_id, link_data.item_id))
    if existing:
        raise Conflict(
            "This item is already associated with this supplier. "
            "Update the cost instead."
        )

    db.add(
        SupplierItem(
            supplier_id=supplier_id,
            item_id=link_data.item_id,
            cost=link_data.cost,
        )
    )
    commit_or_conflict(db, "This item is already associated with this supplier")

    return _to_response(_get_link(db, supplier_id, link_data.item_id))


@router.put("/{item_id}", response_model=SupplierItemResponse)
def update_supplier_item(
    supplier_id: int,
    item_id: int,
    link_data: SupplierItemUpdate,
    db: Session = Depends(get_db),
):
    link = _get_link(db, supplier_id, item_id)
    link.cost = link_data.cost

    db.commit()

    return _to_response(_get_link(db, supplier_id, item_id))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supplier_item(
    supplier_id: int,
    item_id: int,
    db: Session = Depends(get_db),
):
    link = _get_link(db, supplier_id, item_id)

    db.delete(link)
    db.commit()

    return None
