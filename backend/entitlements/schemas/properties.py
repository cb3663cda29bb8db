"""Property Pydantic schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PropertyCreate(BaseModel):
    owner_id: int
    name: str = Field(min_length=1, max_length=255)
    size: Decimal = Field(default=Decimal(0), ge=0)


class PropertyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    size: Decimal
