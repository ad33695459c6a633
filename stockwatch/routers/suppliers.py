# stockwatch/routers/suppliers.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockwatch.core.errors import Conflict, NotFound
from stockwatch.database import get_db
from stockwatch.models.deliveries import Delivery
from stockwatch.models.suppliers import Supplier
from stockwatch.schemas.supplier import (
    SupplierCreate,
    SupplierResponse,
    SupplierUpdate,
)
from stockwatch.services.catalog import commit_or_conflict

router = APIRouter(
    prefix="/suppliers",
    tags=["Suppliers"],
)


def get_supplier_or_404(db: Session, supplier_id: int) -> Supplier:
    supplier = db.get(Supplier, supplier_id)

    if not supplier:
        raise NotFound("Supplier not found")

    return supplier


def _ensure_email_free(db: Session, email: str | None, exclude_id: int | None = None):
    if not email:
        return

    query = db.query(Supplier).filter(Supplier.email == email)
    if exclude_id is not None:
        query = query.filter(Supplier.id != exclude_id)

    if query.first():
        raise Conflict("Supplier email already exists")


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
def create_supplier(supplier_data: SupplierCreate, db: Session = Depends(get_db)):
    _ensure_email_free(db, supplier_data.email)

    supplier = Supplier(**supplier_data.model_dump())

    db.add(supplier)
    commit_or_conflict(db, "Supplier email already exists")
    db.refresh(supplier)

    return supplier


@router.get("", response_model=list[SupplierResponse])
def list_suppliers(db: Session = Depends(get_db)):
    return db.query(Supplier).order_by(Supplier.id.asc()).all()


@router.get("/{supplier_id}", response_model=SupplierResponse)
def get_supplier(supplier_id: int, db: Session = Depends(get_db)):
    return get_supplier_or_404(db, supplier_id)


@router.put("/{supplier_id}", response_model=SupplierResponse)
def update_supplier(
    supplier_id: int,
    supplier_data: SupplierUpdate,
    db: Session = Depends(get_db),
):
    supplier = get_supplier_or_404(db, supplier_id)
    changes = supplier_data.model_dump(exclude_unset=True)

    if "email" in changes:
        _ensure_email_free(db, changes["email"], exclude_id=supplier.id)

    if changes.get("name") is None:
        changes.pop("name", None)

    for field_name, value in changes.items():
        setattr(supplier, field_name, value)

    commit_or_conflict(db, "Updated supplier email conflicts with an existing one")
    db.refresh(supplier)

    return supplier


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supplier(supplier_id: int, db: Session = Depends(get_db)):
    supplier = get_supplier_or_404(db, supplier_id)

    # Deliveries outlive their supplier; supplier-item links do not
    db.query(Delivery).filter(Delivery.supplier_id == supplier.id).update(
        {Delivery.supplier_id: None},
        synchronize_session=False,
    )
    db.delete(supplier)
    commit_or_conflict(db, "Cannot delete supplier")

    return None
