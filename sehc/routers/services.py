"""Service record API routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from sehc.core.database import get_db
from sehc.core.security import get_current_user
from sehc.handlers import services as handlers
from sehc.schemas import ServiceCreate, ServiceOut

router = APIRouter(prefix="/service", tags=["Services"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
def create_service(payload: ServiceCreate, db: Session = Depends(get_db)) -> Response:
    return handlers.create_service(db, payload).to_response()


@router.get("", response_model=List[ServiceOut])
def list_services(
    idVehicle: Optional[int] = Query(None, description="Only services for this vehicle"),
    db: Session = Depends(get_db),
) -> Response:
    return handlers.list_services(db, idVehicle).to_response()


@router.get("/{idService}", response_model=ServiceOut)
def get_service(idService: int, db: Session = Depends(get_db)) -> Response:
    return handlers.get_service(db, idService).to_response()
