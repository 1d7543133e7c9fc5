"""Inventory API routes."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from sehc.core.database import get_db
from sehc.core.security import get_current_user
from sehc.handlers import inventory as handlers
from sehc.schemas import InventoryItemCreate, InventoryItemOut, InventoryItemUpdate

router = APIRouter(prefix="/inventory", tags=["Inventory"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[InventoryItemOut])
def list_inventory_items(db: Session = Depends(get_db)) -> Response:
    return handlers.list_items(db).to_response()


@router.get("/{item_id}", response_model=InventoryItemOut)
def get_inventory_item(item_id: int, db: Session = Depends(get_db)) -> Response:
    return handlers.get_item(db, item_id).to_response()


@router.post("", response_model=InventoryItemOut, status_code=status.HTTP_201_CREATED)
def create_inventory_item(payload: InventoryItemCreate, db: Session = Depends(get_db)) -> Response:
    return handlers.create_item(db, payload).to_response()


@router.put("/{item_id}", response_model=InventoryItemOut)
def update_inventory_item(item_id: int, payload: InventoryItemUpdate, db: Session = Depends(get_db)) -> Response:
    return handlers.update_item(db, item_id, payload).to_response()


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(item_id: int, db: Session = Depends(get_db)) -> Response:
    return handlers.delete_item(db, item_id).to_response()
