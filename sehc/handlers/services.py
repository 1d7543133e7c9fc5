"""
Service records and the stock they consume.

Creating a service is the only multi-entity write in the API.  It runs
in two phases:

1. an advisory pre-check that every requested inventory item exists
   and has enough stock, done before anything is written;
2. a single transaction that inserts the service, one link row per
   requested line, and decrements each item with a guarded UPDATE
   (``quantity >= requested`` in the WHERE clause).

The guarded UPDATE and the ``quantity >= 0`` CHECK constraint are what
keep stock from going negative when concurrent requests race past the
pre-check; any failure in phase 2 rolls back the whole service.
"""

import logging
from typing import Dict, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from sehc.core import results
from sehc.core.errors import STOCK_CONSTRAINT_NAME, StockConflictError
from sehc.core.results import Result
from sehc.core.validators import aggregate_lines, missing_fields, required_message
from sehc.models import InventoryItem, Service, ServiceInventoryItem, User, Vehicle
from sehc.schemas import ServiceCreate, ServiceInventoryItemOut, ServiceOut

logger = logging.getLogger("sehc.handlers.services")

SERVICE_REQUIRED_FIELDS = ("idVehicle", "idUser", "idStatus", "idType", "idPriority")


def serialize_service(service: Service) -> ServiceOut:
    return ServiceOut(
        id=service.id,
        idVehicle=service.vehicle_id,
        idUser=service.user_id,
        idStatus=service.status_id,
        idType=service.type_id,
        idPriority=service.priority_id,
        diagnostic=service.diagnostic,
        gasLevel=service.gas_level,
        km=service.km,
        serviceDetails=service.service_details,
        totalCost=service.total_cost,
        serviceNotes=service.service_notes,
        createdAt=service.created_at,
        updatedAt=service.updated_at,
        inventoryItems=[
            ServiceInventoryItemOut(
                id=link.id,
                inventoryItemId=link.inventory_item_id,
                name=link.inventory_item.name if link.inventory_item else None,
                quantity=link.quantity,
            )
            for link in service.inventory_items
        ],
    )


def is_stock_violation(exc: IntegrityError) -> bool:
    return STOCK_CONSTRAINT_NAME in str(exc.orig)


def check_stock(db: Session, totals: Dict[int, int]) -> None:
    for item_id, requested in totals.items():
        item = db.get(InventoryItem, item_id)
        if item is None or item.quantity < requested:
            logger.warning(
                "Stock pre-check failed for item %s: requested %s, available %s",
                item_id,
                requested,
                None if item is None else item.quantity,
            )
            raise StockConflictError()


def decrement_stock(db: Session, item_id: int, quantity: int) -> None:
    """Take ``quantity`` units of ``item_id``; refuses to go below zero."""
    outcome = db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item_id, InventoryItem.quantity >= quantity)
        .values(quantity=InventoryItem.quantity - quantity)
        .execution_options(synchronize_session=False)
    )
    if outcome.rowcount != 1:
        raise StockConflictError()


def _load_service(db: Session, service_id: int) -> Optional[Service]:
    return (
        db.query(Service)
        .options(selectinload(Service.inventory_items).selectinload(ServiceInventoryItem.inventory_item))
        .filter(Service.id == service_id)
        .first()
    )


def create_service(db: Session, payload: ServiceCreate) -> Result:
    missing = missing_fields(payload.model_dump(), SERVICE_REQUIRED_FIELDS)
    if missing:
        logger.warning("[POST] service - missing required fields: %s", ", ".join(missing))
        return results.bad_request(required_message(missing))

    lines = payload.inventoryItems
    totals = aggregate_lines((line.inventoryItemId, line.quantity) for line in lines)

    try:
        if db.get(Vehicle, payload.idVehicle) is None:
            return results.not_found(f"No vehicle found with id {payload.idVehicle}")
        if db.get(User, payload.idUser) is None:
            return results.not_found(f"No user found with id {payload.idUser}")

        check_stock(db, totals)

        service = Service(
            vehicle_id=payload.idVehicle,
            user_id=payload.idUser,
            status_id=payload.idStatus,
            type_id=payload.idType,
            priority_id=payload.idPriority,
            diagnostic=payload.diagnostic,
            gas_level=payload.gasLevel,
            km=payload.km,
            service_details=payload.serviceDetails,
            total_cost=payload.totalCost,
            service_notes=payload.serviceNotes,
            inventory_items=[
                ServiceInventoryItem(inventory_item_id=line.inventoryItemId, quantity=line.quantity)
                for line in lines
            ],
        )
        db.add(service)
        db.flush()
        service_id = service.id
        for line in lines:
            decrement_stock(db, line.inventoryItemId, line.quantity)
        db.commit()
    except StockConflictError as exc:
        db.rollback()
        logger.warning("[POST] service - %s", exc)
        return results.conflict(str(exc))
    except IntegrityError as exc:
        db.rollback()
        if is_stock_violation(exc):
            logger.warning("[POST] service - stock constraint rejected the decrement")
            return results.conflict(str(StockConflictError()))
        logger.exception("[POST] service - integrity error")
        return results.internal_error()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[POST] service - database error")
        return results.internal_error()

    logger.info("[POST] service - service %s created with %d inventory lines", service_id, len(lines))
    try:
        return results.created(serialize_service(_load_service(db, service_id)))
    except SQLAlchemyError:
        logger.exception("[POST] service - created service %s could not be reloaded", service_id)
        return results.internal_error()


def get_service(db: Session, service_id: int) -> Result:
    try:
        service = _load_service(db, service_id)
    except SQLAlchemyError:
        logger.exception("[GET] service/%s - database error", service_id)
        return results.internal_error()

    if service is None:
        return results.not_found(f"No service found with id {service_id}")
    return results.ok(serialize_service(service))


def list_services(db: Session, vehicle_id: Optional[int] = None) -> Result:
    try:
        query = db.query(Service).options(
            selectinload(Service.inventory_items).selectinload(ServiceInventoryItem.inventory_item)
        )
        if vehicle_id is not None:
            query = query.filter(Service.vehicle_id == vehicle_id)
        services = query.order_by(Service.created_at.desc(), Service.id.desc()).all()
    except SQLAlchemyError:
        logger.exception("[GET] service - database error")
        return results.internal_error()

    return results.ok([serialize_service(service) for service in services])
