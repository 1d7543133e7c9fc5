"""SQLAlchemy models package."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import models so metadata can discover them easily
from .clients import Client  # noqa: E402,F401
from .vehicles import Vehicle  # noqa: E402,F401
from .inventory import InventoryItem  # noqa: E402,F401
from .users import User  # noqa: E402,F401
from .services import Service, ServiceInventoryItem  # noqa: E402,F401

__all__ = [
    "Base",
    "Client",
    "Vehicle",
    "InventoryItem",
    "User",
    "Service",
    "ServiceInventoryItem",
]
