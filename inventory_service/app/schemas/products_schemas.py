from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from shared.core.schemas import CommonQueryParams


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Strip, drop blanks and de-duplicate while keeping first-seen order."""
    seen = []
    for tag in tags or []:
        tag = (tag or "").strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    tags: List[str] = []
    price: Decimal = Field(default=Decimal("0"), ge=0)
    is_deprecated: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return normalize_tags(v)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    tags: Optional[List[str]] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    is_deprecated: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return None if v is None else normalize_tags(v)


class ProductOut(BaseModel):
    id: UUID
    name: str
    tags: List[str] = []
    price: float
    is_deprecated: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductQueryParams(CommonQueryParams):
    include_deprecated: bool = True


class BulkPriceUpdate(BaseModel):
    product_ids: List[UUID] = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)


class BulkPriceResult(BaseModel):
    message: str
    updated_count: int
    requested_count: int
