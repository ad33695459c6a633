# =========================================================
# CATALOG HELPERS (REFERENCE DATA)
#
# Inventory items are a base row plus one satellite row chosen
# by item_type. Creation, update and delete keep the pair
# consistent and keep quantity_on_hand out of CRUD's reach.
# =========================================================

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from stockwatch.core.errors import Conflict, InvalidReference, NotFound
from stockwatch.models.category import Category
from stockwatch.models.deliveries import DeliveryLine
from stockwatch.models.inventory import (
    InventoryItem,
    ItemType,
    NonPerishableItem,
    PerishableItem,
    ToolItem,
)
from stockwatch.models.menu import RecipeIngredient
from stockwatch.models.suppliers import SupplierItem
from stockwatch.models.units import UnitOfMeasure
from stockwatch.models.usage import UsageRecord
from stockwatch.models.waste import WasteRecord
from stockwatch.schemas.item import ItemCreate, ItemUpdate

logger = logging.getLogger("stockwatch")

# Satellite attributes each item type owns
SATELLITE_FIELDS = {
    ItemType.PERISHABLE: ("expiration_date", "storage_temperature"),
    ItemType.NON_PERISHABLE: ("warranty_period",),
    ItemType.TOOL: ("maintenance_schedule",),
}


def commit_or_conflict(db: Session, conflict_detail: str):
    """Commit, turning a uniqueness/foreign-key violation into Conflict."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(conflict_detail)


def require_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise InvalidReference(f"Category {category_id} not found")
    return category


def require_unit(db: Session, unit_id: int) -> UnitOfMeasure:
    unit = db.get(UnitOfMeasure, unit_id)
    if unit is None:
        raise InvalidReference(f"Unit of measure {unit_id} not found")
    return unit


def get_item(db: Session, item_id: int) -> InventoryItem:
    item = (
        db.query(InventoryItem)
        .options(
            joinedload(InventoryItem.category),
            joinedload(InventoryItem.unit),
            joinedload(InventoryItem.perishable),
            joinedload(InventoryItem.non_perishable),
            joinedload(InventoryItem.tool),
        )
        .filter(InventoryItem.id == item_id)
        .first()
    )

    if item is None:
        raise NotFound("Inventory item not found")

    return item


SATELLITE_MODELS = {
    ItemType.PERISHABLE: (PerishableItem, "perishable"),
    ItemType.NON_PERISHABLE: (NonPerishableItem, "non_perishable"),
    ItemType.TOOL: (ToolItem, "tool"),
}


def _attach_satellite(item: InventoryItem, item_type: ItemType, values: dict):
    model, attribute = SATELLITE_MODELS[item_type]
    satellite = model(**{name: values.get(name) for name in SATELLITE_FIELDS[item_type]})
    setattr(item, attribute, satellite)
    return satellite


def create_item(db: Session, data: ItemCreate) -> InventoryItem:
    if db.query(InventoryItem).filter(InventoryItem.name == data.name).first():
        raise Conflict("Inventory item name already exists")

    require_category(db, data.category_id)
    require_unit(db, data.unit_id)

    item = InventoryItem(
        name=data.name,
        description=data.description,
        category_id=data.category_id,
        unit_id=data.unit_id,
        quantity_on_hand=data.quantity_on_hand,
        opening_quantity=data.quantity_on_hand,
        reorder_point=data.reorder_point,
        item_type=data.item_type.value,
    )

    _attach_satellite(item, data.item_type, data.model_dump())

    db.add(item)
    commit_or_conflict(db, "Inventory item name already exists")

    logger.info(f"Inventory item {item.id} ({item.name}) created as {item.item_type}")

    return get_item(db, item.id)


def update_item(db: Session, item_id: int, data: ItemUpdate) -> InventoryItem:
    item = get_item(db, item_id)
    changes = data.model_dump(exclude_unset=True)

    if "name" in changes and changes["name"] != item.name:
        duplicate = (
            db.query(InventoryItem)
            .filter(InventoryItem.name == changes["name"], InventoryItem.id != item.id)
            .first()
        )
        if duplicate:
            raise Conflict("Updated item name conflicts with an existing one")

    if changes.get("category_id") is not None:
        require_category(db, changes["category_id"])
    if changes.get("unit_id") is not None:
        require_unit(db, changes["unit_id"])

    for field_name in ("name", "category_id", "unit_id", "reorder_point"):
        if changes.get(field_name) is not None:
            setattr(item, field_name, changes[field_name])

    if "description" in changes:
        item.description = changes["description"]

    # Only the branch matching the discriminant is touched
    item_type = ItemType(item.item_type)
    satellite = item.details
    if satellite is None:
        satellite = _attach_satellite(item, item_type, {})

    for field_name in SATELLITE_FIELDS[item_type]:
        if field_name in changes:
            setattr(satellite, field_name, changes[field_name])

    commit_or_conflict(db, "Updated item name conflicts with an existing one")

    return get_item(db, item.id)


def item_has_history(db: Session, item_id: int) -> bool:
    for model in (DeliveryLine, UsageRecord, WasteRecord, RecipeIngredient):
        if db.query(model).filter(model.item_id == item_id).first() is not None:
            return True
    return False


def delete_item(db: Session, item_id: int):
    item = db.get(InventoryItem, item_id)
    if item is None:
        raise NotFound("Inventory item not found")

    if item_has_history(db, item_id):
        raise Conflict(
            "Cannot delete item: it is referenced in other records "
            "(deliveries, recipes, usage or waste)"
        )

    db.query(SupplierItem).filter(SupplierItem.item_id == item_id).delete(
        synchronize_session=False
    )
    db.delete(item)
    commit_or_conflict(db, "Cannot delete item: it is referenced in other records")

    logger.info(f"Inventory item {item_id} deleted")
