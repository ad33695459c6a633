# schemas/delivery.py

from datetime import date, datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from stockwatch.schemas.item import ItemSummary
from stockwatch.schemas.supplier import SupplierSummary
from stockwatch.schemas.unit import UnitResponse


class DeliveryLineCreate(BaseModel):
    item_id: int = Field(..., gt=0)
    quantity_received: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)
    unit_id: int = Field(..., gt=0)
    expiration_date: date | None = None
    unit_cost: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class DeliveryCreate(BaseModel):
    supplier_id: int | None = Field(None, gt=0)
    delivery_date: date
    invoice_number: str | None = None
    items: List[DeliveryLineCreate] = Field(..., min_length=1)


class DeliveryLineResponse(BaseModel):
    id: int
    item_id: int
    quantity_received: Decimal
    unit_cost: Decimal | None
    expiration_date: date | None
    created_at: datetime
    item: ItemSummary
    unit: UnitResponse

    class Config:
        from_attributes = True


class DeliveryResponse(BaseModel):
    id: int
    supplier_id: int | None
    supplier: SupplierSummary | None
    delivery_date: date
    invoice_number: str | None
    created_at: datetime
    lines: List[DeliveryLineResponse]

    class Config:
        from_attributes = True
