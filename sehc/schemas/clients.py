"""Schemas for Client entities."""

from datetime import datetime

from pydantic import BaseModel, constr

NonEmpty = constr(strip_whitespace=True, min_length=1)


class FiscalFields(BaseModel):
    socialReason: str | None = None
    zipcode: str | None = None
    fiscalRegimen: str | None = None
    email: str | None = None


class ClientCreate(FiscalFields):
    name: NonEmpty
    lastName: NonEmpty
    phone: NonEmpty
    invoice: bool


class ClientInvoiceUpdate(FiscalFields):
    idClient: int
    invoice: bool


class ClientDetailsUpdate(BaseModel):
    idClient: int
    name: NonEmpty | None = None
    lastName: NonEmpty | None = None
    phone: NonEmpty | None = None


class ClientOut(FiscalFields):
    id: int
    name: str
    lastName: str
    phone: str
    invoice: bool
    createdAt: datetime | None = None
    updatedAt: datetime | None = None
