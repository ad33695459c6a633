from pydantic import BaseModel, Field


class UnitCreate(BaseModel):
    unit: str = Field(..., min_length=1, max_length=50)
    abbreviation: str = Field(..., min_length=1, max_length=20)


class UnitResponse(BaseModel):
    id: int
    unit: str
    abbreviation: str

    class Config:
        from_attributes = True
