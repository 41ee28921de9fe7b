from decimal import Decimal
from typing import List, Optional, Union
from pydantic import BaseModel, Field

from .sales_schemas import SaleOut


class ImportItem(BaseModel):
    # Blank names are rejected per item by the importer, not here
    name: str = ""
    initial_quantity: int = 0
    sold_quantity: int = 0
    tags: List[str] = []
    deprecated: bool = False
    price: Optional[Decimal] = Field(default=None, ge=0)


class CsvImportRequest(BaseModel):
    items: List[ImportItem]


class ImportResult(BaseModel):
    imported_count: int = 0
    error_count: int = 0
    messages: List[str] = []


class EtsyReceiptItem(BaseModel):
    title: str
    description: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(..., gt=0)
    tags: List[str] = []
    receipt_id: Optional[Union[int, str]] = None
    # Unix seconds, fractional from some clients
    created_timestamp: Optional[float] = None


class EtsyImportRequest(BaseModel):
    etsy_data: List[EtsyReceiptItem]


class EtsyImportFailure(BaseModel):
    title: str
    error: str


class EtsyImportResult(BaseModel):
    message: str = "Etsy sales import completed"
    imported: int = 0
    errors: int = 0
    imported_sales: List[SaleOut] = []
    failures: List[EtsyImportFailure] = []
