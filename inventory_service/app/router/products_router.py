# app/routers/products_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.core.auth import validate_current_token
from ..schemas.products_schemas import (
    BulkPriceResult,
    BulkPriceUpdate,
    ProductCreate,
    ProductOut,
    ProductQueryParams,
    ProductUpdate,
)
from ..crud import products_crud as crud

router = APIRouter(prefix="/api", tags=["products"],
                   dependencies=[Depends(validate_current_token)])


@router.get("/products", response_model=List[ProductOut])
def read_products(
    params: ProductQueryParams = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_products(db, params)


@router.get("/tags", response_model=List[str])
def read_tags(db: Session = Depends(get_db)):
    return crud.get_all_tags(db)


@router.put("/products/bulk-price", response_model=BulkPriceResult)
def update_bulk_price(
    payload: BulkPriceUpdate,
    db: Session = Depends(get_db)
):
    updated = crud.bulk_update_price(db, payload.product_ids, payload.price)
    return BulkPriceResult(
        message=f"Updated price for {updated} products",
        updated_count=updated,
        requested_count=len(payload.product_ids),
    )


@router.get("/products/{product_id}", response_model=ProductOut)
def read_product(
    product_id: UUID,
    db: Session = Depends(get_db)
):
    db_product = crud.get_product_by_id(db, product_id)
    if not db_product:
        raise HTTPException(status_code=404, detail="Product not found")
    return db_product


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db)
):
    return crud.create_product(db, product)


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: UUID,
    product: ProductUpdate,
    db: Session = Depends(get_db)
):
    db_product = crud.update_product(db, product_id, product)
    if not db_product:
        raise HTTPException(status_code=404, detail="Product not found")
    return db_product


@router.delete("/products/{product_id}")
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db)
):
    if not crud.delete_product(db, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return {"message": "Product deleted"}
