# =========================================================
# MENU ITEMS ROUTER
#
# Menu item CRUD plus the recipe (ingredient lines) that
# record_sale expands into stock deductions.
#
# Deleting a menu item removes its recipe and detaches past
# sale usage records (menu_item_id -> NULL).
# =========================================================

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from stockwatch.core.errors import Conflict, InvalidReference, NotFound
from stockwatch.database import get_db
from stockwatch.models.inventory import InventoryItem
from stockwatch.models.menu import MenuItem, RecipeIngredient
from stockwatch.models.usage import UsageRecord
from stockwatch.schemas.menu import (
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
    RecipeIngredientCreate,
    RecipeIngredientResponse,
    RecipeIngredientUpdate,
)
from stockwatch.services.catalog import commit_or_conflict, require_unit

router = APIRouter(prefix="/menu-items", tags=["Menu Items"])


def _get_menu_item(db: Session, menu_item_id: int) -> MenuItem:
    menu_item = db.get(MenuItem, menu_item_id)

    if not menu_item:
        raise NotFound("Menu item not found")

    return menu_item


def _get_ingredient(db: Session, menu_item_id: int, item_id: int) -> RecipeIngredient:
    ingredient = (
        db.query(RecipeIngredient)
        .options(
            joinedload(RecipeIngredient.item),
            joinedload(RecipeIngredient.unit),
        )
        .filter(
            RecipeIngredient.menu_item_id == menu_item_id,
            RecipeIngredient.item_id == item_id,
        )
        .first()
    )

    if not ingredient:
        raise NotFound("Recipe ingredient not found for this menu item")

    return ingredient


# =========================================================
# MENU ITEM CRUD
# =========================================================
@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(menu_data: MenuItemCreate, db: Session = Depends(get_db)):
    if db.query(MenuItem).filter(MenuItem.name == menu_data.name).first():
        raise Conflict("Menu item name already exists")

    menu_item = MenuItem(
        name=menu_data.name,
        description=menu_data.description,
        price=menu_data.price,
    )

    db.add(menu_item)
    commit_or_conflict(db, "Menu item name already exists")
    db.refresh(menu_item)

    return menu_item


@router.get("", response_model=list[MenuItemResponse])
def list_menu_items(db: Session = Depends(get_db)):
    return db.query(MenuItem).order_by(MenuItem.id.asc()).all()


@router.get("/{menu_item_id}", response_model=MenuItemResponse)
def get_menu_item(menu_item_id: int, db: Session = Depends(get_db)):
    return _get_menu_item(db, menu_item_id)


@router.put("/{menu_item_id}", response_model=MenuItemResponse)
def update_menu_item(
    menu_item_id: int,
    menu_data: MenuItemUpdate,
    db: Session = Depends(get_db),
):
    menu_item = _get_menu_item(db, menu_item_id)
    changes = menu_data.model_dump(exclude_unset=True)

    if changes.get("name") and changes["name"] != menu_item.name:
        duplicate = (
            db.query(MenuItem)
            .filter(MenuItem.name == changes["name"], MenuItem.id != menu_item.id)
            .first()
        )
        if duplicate:
            raise Conflict("Updated menu item name conflicts with an existing one")
        menu_item.name = changes["name"]

    if "description" in changes:
        menu_item.description = changes["description"]

    if "price" in changes:
        menu_item.price = changes["price"]

    commit_or_conflict(db, "Updated menu item name conflicts with an existing one")
    db.refresh(menu_item)

    return menu_item


@router.delete("/{menu_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(menu_item_id: int, db: Session = Depends(get_db)):
    menu_item = _get_menu_item(db, menu_item_id)

    db.query(UsageRecord).filter(UsageRecord.menu_item_id == menu_item.id).update(
        {UsageRecord.menu_item_id: None},
        synchronize_session=False,
    )
    db.delete(menu_item)
    db.commit()

    return None


# =========================================================
# RECIPE INGREDIENTS
# =========================================================
@router.get("/{menu_item_id}/ingredients", response_model=list[RecipeIngredientResponse])
def list_ingredients(menu_item_id: int, db: Session = Depends(get_db)):
    _get_menu_item(db, menu_item_id)

    return (
        db.query(RecipeIngredient)
        .join(InventoryItem, RecipeIngredient.item_id == InventoryItem.id)
        .options(
            joinedload(RecipeIngredient.item),
            joinedload(RecipeIngredient.unit),
        )
        .filter(RecipeIngredient.menu_item_id == menu_item_id)
        .order_by(InventoryItem.name.asc())
        .all()
    )


@router.post(
    "/{menu_item_id}/ingredients",
    response_model=RecipeIngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_ingredient(
    menu_item_id: int,
    ingredient_data: RecipeIngredientCreate,
    db: Session = Depends(get_db),
):
    _get_menu_item(db, menu_item_id)

    if db.get(InventoryItem, ingredient_data.item_id) is None:
        raise InvalidReference(f"Inventory item {ingredient_data.item_id} not found")

    require_unit(db, ingredient_data.unit_id)

    if db.get(RecipeIngredient, (menu_item_id, ingredient_data.item_id)):
        raise Conflict("This ingredient already exists in the recipe for this menu item")

    db.add(
        RecipeIngredient(
            menu_item_id=menu_item_id,
            item_id=ingredient_data.item_id,
            quantity_required=ingredient_data.quantity_required,
            unit_id=ingredient_data.unit_id,
        )
    )
    commit_or_conflict(db, "This ingredient already exists in the recipe for this menu item")

    return _get_ingredient(db, menu_item_id, ingredient_data.item_id)


@router.put(
    "/{menu_item_id}/ingredients/{item_id}",
    response_model=RecipeIngredientResponse,
)
def update_ingredient(
    menu_item_id: int,
    item_id: int,
    ingredient_data: RecipeIngredientUpdate,
    db: Session = Depends(get_db),
):
    ingredient = _get_ingredient(db, menu_item_id, item_id)
    require_unit(db, ingredient_data.unit_id)

    ingredient.quantity_required = ingredient_data.quantity_required
    ingredient.unit_id = ingredient_data.unit_id

    db.commit()

    return _get_ingredient(db, menu_item_id, item_id)


@router.delete(
    "/{menu_item_id}/ingredients/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_ingredient(
    menu_item_id: int,
    item_id: int,
    db: Session = Depends(get_db),
):
    ingredient = _get_ingredient(db, menu_item_id, item_id)

    db.delete(ingredient)
    db.commit()

    return None
