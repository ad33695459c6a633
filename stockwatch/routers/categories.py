# stockwatch/routers/categories.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockwatch.core.errors import Conflict, NotFound
from stockwatch.database import get_db
from stockwatch.models.category import Category
from stockwatch.models.inventory import InventoryItem
from stockwatch.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)
from stockwatch.services.catalog import commit_or_conflict

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


def _get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)

    if not category:
        raise NotFound("Category not found")

    return category


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
):
    if db.query(Category).filter(Category.name == category_data.name).first():
        raise Conflict("Category name already exists")

    category = Category(
        name=category_data.name,
        description=category_data.description,
    )

    db.add(category)
    commit_or_conflict(db, "Category name already exists")
    db.refresh(category)

    return category


@router.get("", response_model=list[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.id.asc()).all()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return _get_category(db, category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db),
):
    category = _get_category(db, category_id)
    changes = category_data.model_dump(exclude_unset=True)

    if changes.get("name") and changes["name"] != category.name:
        duplicate = (
            db.query(Category)
            .filter(Category.name == category_data.name, Category.id != category.id)
            .first()
        )
        if duplicate:
            raise Conflict("Updated category name conflicts with an existing one")
        category.name = changes["name"]

    if "description" in changes:
        category.description = changes["description"]

    commit_or_conflict(db, "Updated category name conflicts with an existing one")
    db.refresh(category)

    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    category = _get_category(db, category_id)

    in_use = (
        db.query(InventoryItem)
        .filter(InventoryItem.category_id == category.id)
        .first()
    )
    if in_use:
        raise Conflict("Cannot delete category: it is referenced by inventory items")

    db.delete(category)
    commit_or_conflict(db, "Cannot delete category: it is referenced by inventory items")

    return None
