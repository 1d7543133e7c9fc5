"""Pydantic schemas for API payloads."""

from .clients import ClientCreate, ClientDetailsUpdate, ClientInvoiceUpdate, ClientOut, FiscalFields
from .inventory import InventoryItemCreate, InventoryItemOut, InventoryItemUpdate
from .services import InventoryLine, ServiceCreate, ServiceInventoryItemOut, ServiceOut
from .users import RegisterResponse, TokenResponse, UserLogin, UserOut, UserRegister
from .vehicles import VehicleBase, VehicleCreate, VehicleOut, VehicleUpdate

__all__ = [
    "FiscalFields",
    "ClientCreate",
    "ClientInvoiceUpdate",
    "ClientDetailsUpdate",
    "ClientOut",
    "VehicleBase",
    "VehicleCreate",
    "VehicleUpdate",
    "VehicleOut",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryItemOut",
    "InventoryLine",
    "ServiceCreate",
    "ServiceInventoryItemOut",
    "ServiceOut",
    "UserRegister",
    "UserLogin",
    "UserOut",
    "RegisterResponse",
    "TokenResponse",
]
