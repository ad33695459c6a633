from decimal import Decimal
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1)
    contact_person: str | None = None
    phone_number: str | None = None
    email: EmailStr | None = None
    street_address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


class SupplierUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    contact_person: str | None = None
    phone_number: str | None = None
    email: EmailStr | None = None
    street_address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


class SupplierResponse(BaseModel):
    id: int
    name: str
    contact_person: str | None
    phone_number: str | None
    email: str | None
    street_address: str | None
    city: str | None
    postal_code: str | None
    country: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class SupplierSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class SupplierItemCreate(BaseModel):
    item_id: int = Field(..., gt=0)
    cost: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class SupplierItemUpdate(BaseModel):
    cost: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class SupplierItemResponse(BaseModel):
    supplier_id: int
    item_id: int
    item_name: str
    item_type: str
    unit_abbreviation: str
    cost: Decimal
    created_at: datetime
