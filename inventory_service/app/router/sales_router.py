# app/routers/sales_router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.core.auth import validate_current_token
from shared.core.schemas import ExportResponse
from ..schemas.sales_schemas import (
    BulkSaleRequest,
    BulkSaleResult,
    SaleCreate,
    SaleOut,
    SaleQueryParams,
)
from ..crud import sales_crud as crud
from ..services.import_service import record_bulk_sales
from ..services.stock_ledger import StockLedger, get_ledger

router = APIRouter(prefix="/api/sales", tags=["sales"],
                   dependencies=[Depends(validate_current_token)])


@router.get("", response_model=List[SaleOut])
def read_sales(
    params: SaleQueryParams = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_sales(db, params)


@router.get("/export", response_model=ExportResponse)
def export_sales(
    params: SaleQueryParams = Depends(),
    db: Session = Depends(get_db)
):
    return crud.export_sales(db, params)


@router.post("", response_model=SaleOut, status_code=201)
def create_sale(
    sale: SaleCreate,
    ledger: StockLedger = Depends(get_ledger)
):
    return ledger.create_sale_and_adjust(
        sale.product_id,
        sale.quantity,
        sale.sale_price,
        sale.channel,
        channel_order_id=sale.channel_order_id,
        total_amount=sale.total_amount,
        date_time=sale.date_time,
    )


@router.post("/bulk", response_model=BulkSaleResult)
def create_bulk_sales(
    payload: BulkSaleRequest,
    ledger: StockLedger = Depends(get_ledger)
):
    return record_bulk_sales(ledger, payload.channel, payload.items)
