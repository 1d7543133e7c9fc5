"""Schemas for Service entities and their consumed inventory lines."""

from datetime import datetime
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, condecimal, conint, field_validator

from sehc.core.validators import MAX_AMOUNT, round_money


class InventoryLine(BaseModel):
    inventoryItemId: int
    quantity: conint(gt=0)


class ServiceCreate(BaseModel):
    # Required; presence is enforced by handlers.services.create_service.
    idVehicle: int | None = None
    idUser: int | None = None
    idStatus: int | None = None
    idType: int | None = None
    idPriority: int | None = None
    diagnostic: str | None = None
    gasLevel: str | None = None
    km: conint(ge=0) | None = None
    serviceDetails: Any = None
    totalCost: condecimal(ge=0, le=MAX_AMOUNT) | None = None
    serviceNotes: str | None = None
    inventoryItems: List[InventoryLine] = []

    @field_validator("totalCost")
    @classmethod
    def round_total_cost(cls, value: Decimal | None) -> Decimal | None:
        return round_money(value)


class ServiceInventoryItemOut(BaseModel):
    id: int
    inventoryItemId: int
    name: str | None = None
    quantity: int


class ServiceOut(BaseModel):
    id: int
    idVehicle: int
    idUser: int
    idStatus: int
    idType: int
    idPriority: int
    diagnostic: str | None = None
    gasLevel: str | None = None
    km: int | None = None
    serviceDetails: Any = None
    totalCost: float | None = None
    serviceNotes: str | None = None
    createdAt: datetime | None = None
    updatedAt: datetime | None = None
    inventoryItems: List[ServiceInventoryItemOut] = []
