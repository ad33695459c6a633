from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from stockwatch.schemas.item import ItemBalance


class WasteCreate(BaseModel):
    item_id: int = Field(..., gt=0)
    quantity_wasted: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)
    unit_id: int = Field(..., gt=0)
    waste_date: date | None = None
    reason: str | None = Field(None, max_length=500)


class WasteRecordResponse(BaseModel):
    id: int
    item_id: int
    quantity_wasted: Decimal
    unit_id: int
    waste_date: date
    reason: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class WasteResponse(BaseModel):
    waste_record: WasteRecordResponse
    updated_item: ItemBalance

    class Config:
        from_attributes = True
