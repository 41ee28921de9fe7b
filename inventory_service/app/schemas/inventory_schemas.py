from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from .products_schemas import ProductOut


class InventoryUpsert(BaseModel):
    product_id: UUID
    quantity_on_hand: int


class InventoryAdjust(BaseModel):
    product_id: UUID
    adjustment: int


class InventoryOut(BaseModel):
    id: UUID
    product_id: UUID
    quantity_on_hand: int
    product: Optional[ProductOut] = None

    class Config:
        from_attributes = True


class InventorySummaryOut(BaseModel):
    product_id: UUID
    name: Optional[str] = None
    is_deprecated: Optional[bool] = None
    quantity_on_hand: int
    items_sold: int
    revenue: float
