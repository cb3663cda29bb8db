"""Tier Pydantic schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TierCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    max_properties: int = Field(ge=0)
    sort_order: int | None = None
    is_default: bool | None = None


class TierUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    max_properties: int | None = Field(default=None, ge=0)
    sort_order: int | None = None
    is_default: bool | None = None


class TierResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
    max_properties: int
    sort_order: int
    is_default: bool


class AssignTierRequest(BaseModel):
    tier_id: int


class PropertyQuotaResponse(BaseModel):
    user_id: int
    allowed: bool
