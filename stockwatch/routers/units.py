# stockwatch/routers/units.py

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from stockwatch.core.errors import Conflict, NotFound
from stockwatch.database import get_db
from stockwatch.models.deliveries import DeliveryLine
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.menu import RecipeIngredient
from stockwatch.models.units import UnitOfMeasure
from stockwatch.models.usage import UsageRecord
from stockwatch.models.waste import WasteRecord
from stockwatch.schemas.unit import UnitCreate, UnitResponse
from stockwatch.services.catalog import commit_or_conflict

router = APIRouter(
    prefix="/units",
    tags=["Units"],
)

# Tables whose rows must keep resolving their unit
UNIT_REFERENCES = (InventoryItem, RecipeIngredient, DeliveryLine, UsageRecord, WasteRecord)


def _get_unit(db: Session, unit_id: int) -> UnitOfMeasure:
    unit = db.get(UnitOfMeasure, unit_id)

    if not unit:
        raise NotFound("Unit not found")

    return unit


def _ensure_unique(db: Session, unit_data: UnitCreate, exclude_id: int | None = None):
    query = db.query(UnitOfMeasure).filter(
        or_(
            UnitOfMeasure.unit == unit_data.unit,
            UnitOfMeasure.abbreviation == unit_data.abbreviation,
        )
    )
    if exclude_id is not None:
        query = query.filter(UnitOfMeasure.id != exclude_id)

    if query.first():
        raise Conflict("Unit or abbreviation already exists")


@router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
def create_unit(unit_data: UnitCreate, db: Session = Depends(get_db)):
    _ensure_unique(db, unit_data)

    unit = UnitOfMeasure(unit=unit_data.unit, abbreviation=unit_data.abbreviation)

    db.add(unit)
    commit_or_conflict(db, "Unit or abbreviation already exists")
    db.refresh(unit)

    return unit


@router.get("", response_model=list[UnitResponse])
def list_units(db: Session = Depends(get_db)):
    return db.query(UnitOfMeasure).order_by(UnitOfMeasure.id.asc()).all()


@router.get("/{unit_id}", response_model=UnitResponse)
def get_unit(unit_id: int, db: Session = Depends(get_db)):
    return _get_unit(db, unit_id)


@router.put("/{unit_id}", response_model=UnitResponse)
def update_unit(
    unit_id: int,
    unit_data: UnitCreate,
    db: Session = Depends(get_db),
):
    unit = _get_unit(db, unit_id)
    _ensure_unique(db, unit_data, exclude_id=unit.id)

    unit.unit = unit_data.unit
    unit.abbreviation = unit_data.abbreviation

    commit_or_conflict(db, "Updated unit or abbreviation conflicts with an existing one")
    db.refresh(unit)

    return unit


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_unit(unit_id: int, db: Session = Depends(get_db)):
    unit = _get_unit(db, unit_id)

    for model in UNIT_REFERENCES:
        if db.query(model).filter(model.unit_id == unit.id).first():
            raise Conflict(
                "Cannot delete unit: it is referenced by other records "
                "(inventory items, recipes, ledger entries)"
            )

    db.delete(unit)
    commit_or_conflict(db, "Cannot delete unit: it is referenced by other records")

    return None
