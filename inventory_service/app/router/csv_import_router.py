# app/routers/csv_import_router.py
from fastapi import APIRouter, Depends, File, UploadFile
from shared.core.auth import validate_current_token
from ..core.exceptions import ValidationError
from ..schemas.import_schemas import CsvImportRequest, ImportResult
from ..services.import_service import import_products, parse_inventory_csv
from ..services.stock_ledger import StockLedger, get_ledger

router = APIRouter(prefix="/api/csv-import", tags=["csv_import"],
                   dependencies=[Depends(validate_current_token)])


@router.post("", response_model=ImportResult)
def import_csv_rows(
    payload: CsvImportRequest,
    ledger: StockLedger = Depends(get_ledger)
):
    return import_products(ledger, payload.items)


@router.post("/upload", response_model=ImportResult)
def import_csv_file(
    file: UploadFile = File(...),
    ledger: StockLedger = Depends(get_ledger)
):
    try:
        text = file.file.read().decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValidationError("CSV file must be UTF-8 encoded") from e
    return import_products(ledger, parse_inventory_csv(text))
