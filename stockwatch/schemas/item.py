from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from stockwatch.models.inventory import ItemType
from stockwatch.schemas.category import CategoryResponse
from stockwatch.schemas.unit import UnitResponse


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    category_id: int = Field(..., gt=0)
    unit_id: int = Field(..., gt=0)

    # Opening balance; afterwards only ledger operations move it
    quantity_on_hand: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=3)
    reorder_point: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=3)

    item_type: ItemType

    # Perishable
    expiration_date: date | None = None
    storage_temperature: str | None = None
    # NonPerishable
    warranty_period: str | None = None
    # Tool
    maintenance_schedule: str | None = None


class ItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    category_id: int | None = Field(None, gt=0)
    unit_id: int | None = Field(None, gt=0)
    reorder_point: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=3)

    expiration_date: date | None = None
    storage_temperature: str | None = None
    warranty_period: str | None = None
    maintenance_schedule: str | None = None

    class Config:
        # quantity_on_hand and item_type are rejected, not ignored
        extra = "forbid"


class ItemDetailsResponse(BaseModel):
    expiration_date: date | None = None
    storage_temperature: str | None = None
    warranty_period: str | None = None
    maintenance_schedule: str | None = None

    class Config:
        from_attributes = True


class ItemResponse(BaseModel):
    id: int
    name: str
    description: str | None
    category: CategoryResponse
    unit: UnitResponse
    quantity_on_hand: Decimal
    reorder_point: Decimal
    item_type: ItemType
    details: ItemDetailsResponse | None
    created_at: datetime
    last_updated: datetime

    class Config:
        from_attributes = True


class ItemSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ItemBalance(BaseModel):
    id: int
    name: str
    quantity_on_hand: Decimal

    class Config:
        from_attributes = True


class ItemAuditResponse(BaseModel):
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
    replay_error: str | None = None

    class Config:
        from_attributes = True
