from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from stockwatch.schemas.item import ItemSummary
from stockwatch.schemas.unit import UnitResponse


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class MenuItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class MenuItemResponse(BaseModel):
    id: int
    name: str
    description: str | None
    price: Decimal | None
    created_at: datetime
    last_updated: datetime

    class Config:
        from_attributes = True


class RecipeIngredientCreate(BaseModel):
    item_id: int = Field(..., gt=0)
    quantity_required: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)
    unit_id: int = Field(..., gt=0)


class RecipeIngredientUpdate(BaseModel):
    quantity_required: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)
    unit_id: int = Field(..., gt=0)


class RecipeIngredientResponse(BaseModel):
    menu_item_id: int
    item_id: int
    quantity_required: Decimal
    item: ItemSummary
    unit: UnitResponse

    class Config:
        from_attributes = True
