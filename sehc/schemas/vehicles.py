"""Schemas for Vehicle entities."""

from datetime import datetime

from pydantic import BaseModel, conint, constr

NonEmpty = constr(strip_whitespace=True, min_length=1)
Year = conint(ge=1900, le=2100)
Doors = conint(ge=1, le=9)


class VehicleBase(BaseModel):
    brand: NonEmpty
    model: NonEmpty
    year: Year
    color: NonEmpty
    plate: NonEmpty
    doors: Doors
    motor: NonEmpty


class VehicleCreate(VehicleBase):
    idClient: int


class VehicleUpdate(BaseModel):
    idVehicle: int
    idClient: int | None = None
    brand: NonEmpty | None = None
    model: NonEmpty | None = None
    year: Year | None = None
    color: NonEmpty | None = None
    plate: NonEmpty | None = None
    doors: Doors | None = None
    motor: NonEmpty | None = None


class VehicleOut(VehicleBase):
    id: int
    idClient: int
    createdAt: datetime | None = None
    updatedAt: datetime | None = None
