"""Vehicle API routes."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from sehc.core.database import get_db
from sehc.core.security import get_current_user
from sehc.handlers import vehicles as handlers
from sehc.schemas import VehicleCreate, VehicleOut, VehicleUpdate

router = APIRouter(prefix="/vehicle", tags=["Vehicles"], dependencies=[Depends(get_current_user)])


@router.post("/newVehicle", response_model=VehicleOut, status_code=status.HTTP_201_CREATED)
def new_vehicle(payload: VehicleCreate, db: Session = Depends(get_db)) -> Response:
    return handlers.new_vehicle(db, payload).to_response()


@router.get("/getVehicle/{idVehicle}", response_model=VehicleOut)
def get_vehicle(idVehicle: int, db: Session = Depends(get_db)) -> Response:
    return handlers.get_vehicle(db, idVehicle).to_response()


@router.get("/getAllVehicles", response_model=List[VehicleOut])
def get_all_vehicles(db: Session = Depends(get_db)) -> Response:
    return handlers.get_all_vehicles(db).to_response()


@router.get("/getAllVehiclesFromClient/{idClient}", response_model=List[VehicleOut])
def get_all_vehicles_from_client(idClient: int, db: Session = Depends(get_db)) -> Response:
    return handlers.get_all_vehicles_from_client(db, idClient).to_response()


@router.patch("/updateVehicle", response_model=VehicleOut)
@router.put("/updateVehicle", response_model=VehicleOut, include_in_schema=False)
def update_vehicle(payload: VehicleUpdate, db: Session = Depends(get_db)) -> Response:
    return handlers.update_vehicle(db, payload).to_response()


@router.delete("/deleteVehicle/{idVehicle}")
def delete_vehicle(idVehicle: int, db: Session = Depends(get_db)) -> Response:
    return handlers.delete_vehicle(db, idVehicle).to_response()
