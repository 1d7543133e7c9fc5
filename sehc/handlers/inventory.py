"""Inventory item CRUD."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from sehc.core import results
from sehc.core.results import Result
from sehc.core.validators import merge_patch
from sehc.models import InventoryItem, ServiceInventoryItem
from sehc.schemas import InventoryItemCreate, InventoryItemOut, InventoryItemUpdate

logger = logging.getLogger("sehc.handlers.inventory")

ITEM_NOT_FOUND = "Inventory item not found"


def serialize_item(item: InventoryItem) -> InventoryItemOut:
    return InventoryItemOut(
        id=item.id,
        name=item.name,
        description=item.description,
        quantity=item.quantity,
        price=item.price,
        createdAt=item.created_at,
        updatedAt=item.updated_at,
    )


def list_items(db: Session) -> Result:
    try:
        items = db.query(InventoryItem).order_by(InventoryItem.id).all()
    except SQLAlchemyError:
        logger.exception("[GET] inventory - database error")
        return results.internal_error()

    logger.info("[GET] inventory - %d items retrieved", len(items))
    return results.ok([serialize_item(item) for item in items])


def get_item(db: Session, item_id: int) -> Result:
    try:
        item = db.get(InventoryItem, item_id)
    except SQLAlchemyError:
        logger.exception("[GET] inventory/%s - database error", item_id)
        return results.internal_error()

    if item is None:
        logger.warning("[GET] inventory/%s - not found", item_id)
        return results.not_found(ITEM_NOT_FOUND)
    return results.ok(serialize_item(item))


def create_item(db: Session, payload: InventoryItemCreate) -> Result:
    item = InventoryItem(
        name=payload.name,
        description=payload.description,
        quantity=payload.quantity,
        price=payload.price,
    )
    db.add(item)
    try:
        db.commit()
        db.refresh(item)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[POST] inventory - database error")
        return results.internal_error()

    logger.info("[POST] inventory - item %s (%r) created", item.id, item.name)
    return results.created(serialize_item(item))


def update_item(db: Session, item_id: int, payload: InventoryItemUpdate) -> Result:
    try:
        item = db.get(InventoryItem, item_id)
        if item is None:
            logger.warning("[PUT] inventory/%s - not found", item_id)
            return results.not_found(ITEM_NOT_FOUND)

        for key, value in merge_patch(payload.model_dump()).items():
            setattr(item, key, value)

        db.commit()
        db.refresh(item)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[PUT] inventory/%s - database error", item_id)
        return results.internal_error()

    logger.info("[PUT] inventory/%s - updated", item_id)
    return results.ok(serialize_item(item))


def delete_item(db: Session, item_id: int) -> Result:
    try:
        item = db.get(InventoryItem, item_id)
        if item is None:
            logger.warning("[DELETE] inventory/%s - not found", item_id)
            return results.not_found(ITEM_NOT_FOUND)

        in_use = (
            db.query(ServiceInventoryItem.id)
            .filter(ServiceInventoryItem.inventory_item_id == item_id)
            .first()
        )
        if in_use:
            return results.conflict(f"Inventory item {item_id} is linked to services and cannot be deleted")

        db.delete(item)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return results.conflict(f"Inventory item {item_id} is linked to services and cannot be deleted")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[DELETE] inventory/%s - database error", item_id)
        return results.internal_error()

    logger.info("[DELETE] inventory/%s - deleted", item_id)
    return results.no_content()
