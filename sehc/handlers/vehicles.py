"""Vehicle registration and maintenance."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from sehc.core import results
from sehc.core.results import Result
from sehc.core.validators import merge_patch
from sehc.models import Client, Service, Vehicle
from sehc.schemas import VehicleCreate, VehicleOut, VehicleUpdate

logger = logging.getLogger("sehc.handlers.vehicles")

VEHICLE_COLUMNS = {
    "idClient": "client_id",
    "brand": "brand",
    "model": "model",
    "year": "year",
    "color": "color",
    "plate": "plate",
    "doors": "doors",
    "motor": "motor",
}


def serialize_vehicle(vehicle: Vehicle) -> VehicleOut:
    return VehicleOut(
        id=vehicle.id,
        idClient=vehicle.client_id,
        brand=vehicle.brand,
        model=vehicle.model,
        year=vehicle.year,
        color=vehicle.color,
        plate=vehicle.plate,
        doors=vehicle.doors,
        motor=vehicle.motor,
        createdAt=vehicle.created_at,
        updatedAt=vehicle.updated_at,
    )


def _vehicle_not_found(vehicle_id: int) -> Result:
    return results.not_found(f"No vehicle found with id {vehicle_id}")


def _client_missing(client_id: int) -> Result:
    return results.not_found(f"Client with id {client_id} does not exist")


def _client_exists(db: Session, client_id: int) -> bool:
    return db.query(Client.id).filter(Client.id == client_id).first() is not None


def _plate_taken(plate: str) -> Result:
    return results.conflict(f"A vehicle with plate {plate} is already registered")


def new_vehicle(db: Session, payload: VehicleCreate) -> Result:
    try:
        if not _client_exists(db, payload.idClient):
            logger.warning("[POST] vehicle/newVehicle - client %s does not exist", payload.idClient)
            return _client_missing(payload.idClient)

        vehicle = Vehicle(**{VEHICLE_COLUMNS[key]: value for key, value in payload.model_dump().items()})
        db.add(vehicle)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("[POST] vehicle/newVehicle - plate %r already registered", payload.plate)
            return _plate_taken(payload.plate)
        db.refresh(vehicle)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[POST] vehicle/newVehicle - database error")
        return results.internal_error()

    logger.info("[POST] vehicle/newVehicle - vehicle %s registered for client %s", vehicle.id, vehicle.client_id)
    return results.created(serialize_vehicle(vehicle))


def get_vehicle(db: Session, vehicle_id: int) -> Result:
    try:
        vehicle = db.get(Vehicle, vehicle_id)
    except SQLAlchemyError:
        logger.exception("[GET] vehicle/getVehicle - database error")
        return results.internal_error()

    if vehicle is None:
        logger.warning("[GET] vehicle/getVehicle - vehicle %s not found", vehicle_id)
        return _vehicle_not_found(vehicle_id)
    return results.ok(serialize_vehicle(vehicle))


def get_all_vehicles(db: Session) -> Result:
    try:
        vehicles = db.query(Vehicle).order_by(Vehicle.id).all()
    except SQLAlchemyError:
        logger.exception("[GET] vehicle/getAllVehicles - database error")
        return results.internal_error()

    if not vehicles:
        return results.not_found("No vehicles found in the database")
    return results.ok([serialize_vehicle(vehicle) for vehicle in vehicles])


def get_all_vehicles_from_client(db: Session, client_id: int) -> Result:
    try:
        if not _client_exists(db, client_id):
            logger.warning("[GET] vehicle/getAllVehiclesFromClient - client %s does not exist", client_id)
            return _client_missing(client_id)
        vehicles = db.query(Vehicle).filter(Vehicle.client_id == client_id).order_by(Vehicle.id).all()
    except SQLAlchemyError:
        logger.exception("[GET] vehicle/getAllVehiclesFromClient - database error")
        return results.internal_error()

    return results.ok([serialize_vehicle(vehicle) for vehicle in vehicles])


def update_vehicle(db: Session, payload: VehicleUpdate) -> Result:
    changes = merge_patch(payload.model_dump(exclude={"idVehicle"}))
    try:
        vehicle = db.get(Vehicle, payload.idVehicle)
        if vehicle is None:
            logger.warning("[PATCH] vehicle/updateVehicle - vehicle %s not found", payload.idVehicle)
            return _vehicle_not_found(payload.idVehicle)

        if "idClient" in changes and not _client_exists(db, changes["idClient"]):
            return _client_missing(changes["idClient"])

        for key, value in changes.items():
            setattr(vehicle, VEHICLE_COLUMNS[key], value)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("[PATCH] vehicle/updateVehicle - plate %r already registered", changes.get("plate"))
            return _plate_taken(changes.get("plate", vehicle.plate))
        db.refresh(vehicle)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[PATCH] vehicle/updateVehicle - database error")
        return results.internal_error()

    logger.info("[PATCH] vehicle/updateVehicle - vehicle %s updated", vehicle.id)
    return results.ok(serialize_vehicle(vehicle))


def delete_vehicle(db: Session, vehicle_id: int) -> Result:
    try:
        vehicle = db.get(Vehicle, vehicle_id)
        if vehicle is None:
            logger.warning("[DELETE] vehicle/deleteVehicle - vehicle %s not found", vehicle_id)
            return _vehicle_not_found(vehicle_id)

        if db.query(Service.id).filter(Service.vehicle_id == vehicle_id).first():
            return results.conflict(f"Vehicle with id {vehicle_id} has service history and cannot be deleted")

        db.delete(vehicle)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[DELETE] vehicle/deleteVehicle - database error")
        return results.internal_error()

    logger.info("[DELETE] vehicle/deleteVehicle - vehicle %s deleted", vehicle_id)
    return results.ok({"message": f"Vehicle with id {vehicle_id} deleted"})
