from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.utils.enums import SaleChannel
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class SaleCreate(BaseModel):
    product_id: UUID
    quantity: int = Field(..., gt=0)
    sale_price: Decimal = Field(..., ge=0)
    # Defaults to quantity * sale_price when omitted
    total_amount: Optional[Decimal] = Field(default=None, ge=0)
    channel: str = Field(..., min_length=1, max_length=32)
    channel_order_id: Optional[str] = None
    date_time: Optional[datetime] = None


class SaleOut(BaseModel):
    id: UUID
    product_id: UUID
    quantity: int
    sale_price: float
    total_amount: float
    channel: str
    channel_order_id: Optional[str] = None
    date_time: datetime

    class Config:
        from_attributes = True


class SaleQueryParams(EmptyStringModel):
    product_id: Optional[UUID] = None
    channel: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    skip: int = 0
    limit: Optional[int] = None


class BulkSaleItem(BaseModel):
    product_id: UUID
    quantity: int = Field(..., gt=0)


class BulkSaleRequest(BaseModel):
    channel: str = Field(default=SaleChannel.RETAIL.value, min_length=1, max_length=32)
    items: List[BulkSaleItem] = Field(..., min_length=1)


class BulkSaleResult(BaseModel):
    processed_count: int
    error_count: int
    messages: List[str]
