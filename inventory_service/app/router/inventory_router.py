# app/routers/inventory_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.core.auth import validate_current_token
from ..schemas.inventory_schemas import (
    InventoryAdjust,
    InventoryOut,
    InventorySummaryOut,
    InventoryUpsert,
)
from ..crud import inventory_crud as crud
from ..services.stock_ledger import StockLedger, get_ledger

router = APIRouter(prefix="/api/inventory", tags=["inventory"],
                   dependencies=[Depends(validate_current_token)])


@router.get("", response_model=List[InventoryOut])
def read_inventory(db: Session = Depends(get_db)):
    return crud.get_inventory(db)


@router.get("/summary", response_model=List[InventorySummaryOut])
def read_inventory_summary(db: Session = Depends(get_db)):
    return crud.get_inventory_summary(db)


@router.get("/{product_id}", response_model=InventoryOut)
def read_inventory_for_product(
    product_id: UUID,
    ledger: StockLedger = Depends(get_ledger)
):
    return ledger.get_record(product_id)


@router.post("", response_model=InventoryOut)
def upsert_inventory(
    payload: InventoryUpsert,
    ledger: StockLedger = Depends(get_ledger)
):
    return ledger.upsert(payload.product_id, payload.quantity_on_hand)


@router.put("", response_model=InventoryOut)
def adjust_inventory(
    payload: InventoryAdjust,
    ledger: StockLedger = Depends(get_ledger)
):
    return ledger.adjust(payload.product_id, payload.adjustment)
