# schemas/report.py

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel


class LowStockResponse(BaseModel):
    item_id: int
    item_name: str
    category_name: str
    quantity_on_hand: Decimal
    reorder_point: Decimal
    shortfall: Decimal
    unit_abbreviation: str


class ExpirationResponse(BaseModel):
    delivery_line_id: int
    delivery_id: int
    delivery_date: date
    supplier_name: str | None
    item_id: int
    item_name: str
    quantity_received: Decimal
    unit_abbreviation: str
    expiration_date: date
    days_until_expiration: int


class WasteReportResponse(BaseModel):
    waste_id: int
    item_id: int
    item_name: str
    quantity_wasted: Decimal
    unit_abbreviation: str
    waste_date: date
    reason: str | None


class UsageHistoryResponse(BaseModel):
    usage_id: int
    usage_type: str
    item_id: int | None
    item_name: str | None
    quantity_used: Decimal
    unit_abbreviation: str | None
    usage_date: datetime
    menu_item_id: int | None
    menu_item_name: str | None
