"""API routers for domain resources."""

from .auth import router as auth_router
from .clients import router as clients_router
from .inventory import router as inventory_router
from .services import router as services_router
from .vehicles import router as vehicles_router

__all__ = [
    "auth_router",
    "clients_router",
    "inventory_router",
    "services_router",
    "vehicles_router",
]
