# app/routers/etsy_router.py
from fastapi import APIRouter, Depends
from shared.core.auth import validate_current_token
from ..schemas.import_schemas import EtsyImportRequest, EtsyImportResult
from ..services.import_service import import_etsy_sales
from ..services.stock_ledger import StockLedger, get_ledger

router = APIRouter(prefix="/api/etsy", tags=["etsy"],
                   dependencies=[Depends(validate_current_token)])


@router.post("/import", response_model=EtsyImportResult)
def import_etsy(
    payload: EtsyImportRequest,
    ledger: StockLedger = Depends(get_ledger)
):
    return import_etsy_sales(ledger, payload.etsy_data)
