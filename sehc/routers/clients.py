"""Client API routes."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from sehc.core.database import get_db
from sehc.core.security import get_current_user
from sehc.handlers import clients as handlers
from sehc.schemas import ClientCreate, ClientDetailsUpdate, ClientInvoiceUpdate, ClientOut

router = APIRouter(prefix="/client", tags=["Clients"], dependencies=[Depends(get_current_user)])


@router.post("/newClient", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def new_client(payload: ClientCreate, db: Session = Depends(get_db)) -> Response:
    return handlers.new_client(db, payload).to_response()


@router.patch("/updateClientInvoiceDetails", response_model=ClientOut)
def update_client_invoice_details(payload: ClientInvoiceUpdate, db: Session = Depends(get_db)) -> Response:
    return handlers.update_invoice_details(db, payload).to_response()


@router.patch("/updateClientDetails", response_model=ClientOut)
def update_client_details(payload: ClientDetailsUpdate, db: Session = Depends(get_db)) -> Response:
    return handlers.update_details(db, payload).to_response()


@router.get("/getClientDetails/{idClient}", response_model=ClientOut)
def get_client_details(idClient: int, db: Session = Depends(get_db)) -> Response:
    return handlers.get_client_details(db, idClient).to_response()


@router.get("/getAllClients", response_model=List[ClientOut])
def get_all_clients(db: Session = Depends(get_db)) -> Response:
    return handlers.get_all_clients(db).to_response()


@router.delete("/deleteClient/{idClient}")
def delete_client(idClient: int, db: Session = Depends(get_db)) -> Response:
    return handlers.delete_client(db, idClient).to_response()
