"""Schemas for InventoryItem entities."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, condecimal, conint, constr, field_validator

from sehc.core.validators import MAX_AMOUNT, round_money

Quantity = conint(ge=0)
Price = condecimal(ge=0, le=MAX_AMOUNT)


class InventoryItemCreate(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    description: str | None = None
    quantity: Quantity
    price: Price

    @field_validator("price")
    @classmethod
    def round_price(cls, value: Decimal) -> Decimal:
        return round_money(value)


class InventoryItemUpdate(BaseModel):
    name: constr(strip_whitespace=True, min_length=1) | None = None
    description: str | None = None
    quantity: Quantity | None = None
    price: Price | None = None

    @field_validator("price")
    @classmethod
    def round_price(cls, value: Decimal | None) -> Decimal | None:
        return round_money(value)


class InventoryItemOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    quantity: int
    price: float
    createdAt: datetime | None = None
    updatedAt: datetime | None = None
