"""Client registration, lookup, patching and removal."""

import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sehc.core import results
from sehc.core.results import Result
from sehc.core.validators import apply_invoice_rules, merge_patch
from sehc.models import Client, Service, Vehicle
from sehc.schemas import ClientCreate, ClientDetailsUpdate, ClientInvoiceUpdate, ClientOut

logger = logging.getLogger("sehc.handlers.clients")

FISCAL_COLUMNS = {
    "socialReason": "social_reason",
    "zipcode": "zipcode",
    "fiscalRegimen": "fiscal_regimen",
    "email": "email",
}
DETAIL_COLUMNS = {"name": "name", "lastName": "last_name", "phone": "phone"}


def serialize_client(client: Client) -> ClientOut:
    return ClientOut(
        id=client.id,
        name=client.name,
        lastName=client.last_name,
        phone=client.phone,
        invoice=client.invoice,
        socialReason=client.social_reason,
        zipcode=client.zipcode,
        fiscalRegimen=client.fiscal_regimen,
        email=client.email,
        createdAt=client.created_at,
        updatedAt=client.updated_at,
    )


def _client_not_found(client_id: int) -> Result:
    return results.not_found(f"Client with id {client_id} not found")


def _fiscal_columns(fiscal: Dict[str, Any]) -> Dict[str, Any]:
    return {FISCAL_COLUMNS[key]: value for key, value in fiscal.items()}


def new_client(db: Session, payload: ClientCreate) -> Result:
    fiscal = apply_invoice_rules(payload.invoice, payload.model_dump(include=set(FISCAL_COLUMNS)))
    client = Client(
        name=payload.name,
        last_name=payload.lastName,
        phone=payload.phone,
        invoice=payload.invoice,
        **_fiscal_columns(fiscal),
    )
    db.add(client)
    try:
        db.commit()
        db.refresh(client)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[POST] client/newClient - database error")
        return results.internal_error()

    logger.info("[POST] client/newClient - client %s registered", client.id)
    return results.created(serialize_client(client))


def update_invoice_details(db: Session, payload: ClientInvoiceUpdate) -> Result:
    try:
        client = db.get(Client, payload.idClient)
        if client is None:
            logger.warning("[PATCH] client/updateClientInvoiceDetails - client %s not found", payload.idClient)
            return _client_not_found(payload.idClient)

        client.invoice = payload.invoice
        if payload.invoice:
            changes = merge_patch(payload.model_dump(include=set(FISCAL_COLUMNS)))
        else:
            changes = apply_invoice_rules(False, {})
        for key, value in _fiscal_columns(changes).items():
            setattr(client, key, value)

        db.commit()
        db.refresh(client)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[PATCH] client/updateClientInvoiceDetails - database error")
        return results.internal_error()

    logger.info("[PATCH] client/updateClientInvoiceDetails - client %s updated", client.id)
    return results.ok(serialize_client(client))


def update_details(db: Session, payload: ClientDetailsUpdate) -> Result:
    try:
        client = db.get(Client, payload.idClient)
        if client is None:
            logger.warning("[PATCH] client/updateClientDetails - client %s not found", payload.idClient)
            return _client_not_found(payload.idClient)

        changes = merge_patch(payload.model_dump(include=set(DETAIL_COLUMNS)))
        for key, value in changes.items():
            setattr(client, DETAIL_COLUMNS[key], value)

        db.commit()
        db.refresh(client)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[PATCH] client/updateClientDetails - database error")
        return results.internal_error()

    logger.info("[PATCH] client/updateClientDetails - client %s updated", client.id)
    return results.ok(serialize_client(client))


def get_client_details(db: Session, client_id: int) -> Result:
    try:
        client = db.get(Client, client_id)
    except SQLAlchemyError:
        logger.exception("[GET] client/getClientDetails - database error")
        return results.internal_error()

    if client is None:
        logger.warning("[GET] client/getClientDetails - client %s not found", client_id)
        return _client_not_found(client_id)
    return results.ok(serialize_client(client))


def get_all_clients(db: Session) -> Result:
    try:
        clients = db.query(Client).order_by(Client.last_name, Client.name, Client.id).all()
    except SQLAlchemyError:
        logger.exception("[GET] client/getAllClients - database error")
        return results.internal_error()

    if not clients:
        return results.not_found("No clients found")
    return results.ok([serialize_client(client) for client in clients])


def delete_client(db: Session, client_id: int) -> Result:
    try:
        client = db.get(Client, client_id)
        if client is None:
            logger.warning("[DELETE] client/deleteClient - client %s not found", client_id)
            return _client_not_found(client_id)

        has_services = (
            db.query(Service.id)
            .join(Service.vehicle)
            .filter(Vehicle.client_id == client_id)
            .first()
        )
        if has_services:
            return results.conflict(
                f"Client with id {client_id} has vehicles with service history and cannot be deleted"
            )

        db.delete(client)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[DELETE] client/deleteClient - database error")
        return results.internal_error()

    logger.info("[DELETE] client/deleteClient - client %s deleted", client_id)
    return results.ok({"message": f"Client with id {client_id} deleted"})
