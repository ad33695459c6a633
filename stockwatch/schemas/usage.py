# schemas/usage.py

from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from stockwatch.models.usage import UsageType
from stockwatch.schemas.item import ItemBalance


class ManualUsageCreate(BaseModel):
    item_id: int = Field(..., gt=0)
    quantity_used: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)
    unit_id: int = Field(..., gt=0)
    usage_date: datetime | None = None


class SaleCreate(BaseModel):
    quantity_sold: int = Field(1, gt=0, le=10_000)
    usage_date: datetime | None = None


class UsageRecordResponse(BaseModel):
    id: int
    item_id: int | None
    quantity_used: Decimal
    unit_id: int | None
    usage_date: datetime
    usage_type: UsageType
    menu_item_id: int | None
    created_at: datetime

    class Config:
        from_attributes = True


class ManualUsageResponse(BaseModel):
    usage_record: UsageRecordResponse
    updated_item: ItemBalance

    class Config:
        from_attributes = True


class DeductedItem(BaseModel):
    item_id: int
    item_name: str
    quantity_deducted: Decimal
    quantity_on_hand: Decimal

    class Config:
        from_attributes = True


class SaleResponse(BaseModel):
    message: str
    menu_item_id: int
    quantity_sold: int
    deducted_items: List[DeductedItem]
    usage_records: List[UsageRecordResponse]

    class Config:
        from_attributes = True
