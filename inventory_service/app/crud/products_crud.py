# app/crud/products_crud.py
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import pydantic
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.exceptions import ValidationError
from ..models.products import Product
from ..schemas.products_schemas import ProductCreate, ProductQueryParams, ProductUpdate
from .db_helper import commit_or_raise


def get_products(db: Session, params: ProductQueryParams) -> List[Product]:
    query = db.query(Product)

    if params.search:
        query = query.filter(Product.name.ilike(f"%{params.search}%"))

    if not params.include_deprecated:
        query = query.filter(Product.is_deprecated == False)

    query = query.order_by(Product.name).offset(params.skip or 0)
    if params.limit:
        query = query.limit(params.limit)
    return query.all()


def get_product_by_id(db: Session, product_id: UUID) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def get_product_by_name(db: Session, name: str) -> Optional[Product]:
    return db.query(Product).filter(Product.name == name).order_by(Product.created_at).first()


def get_product_by_name_ci(db: Session, name: str) -> Optional[Product]:
    return (
        db.query(Product)
        .filter(func.lower(Product.name) == name.strip().lower())
        .order_by(Product.created_at)
        .first()
    )


def create_product(db: Session, product: ProductCreate) -> Product:
    db_product = Product(**product.model_dump())
    db.add(db_product)
    commit_or_raise(db, "create product", db_product)
    return db_product


def update_product(db: Session, product_id: UUID, product: ProductUpdate) -> Optional[Product]:
    db_product = get_product_by_id(db, product_id)
    if not db_product:
        return None

    # Update only the fields that are provided
    for k, v in product.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(db_product, k, v)

    commit_or_raise(db, "update product", db_product)
    return db_product


def delete_product(db: Session, product_id: UUID) -> bool:
    """Hard delete. Inventory and sales rows for the product are kept."""
    db_product = get_product_by_id(db, product_id)
    if not db_product:
        return False

    db.delete(db_product)
    commit_or_raise(db, "delete product")
    return True


def update_products(db: Session, product_ids: List[UUID], patch: dict) -> int:
    """Apply the same field values to every listed product; unknown ids are skipped."""
    if not patch:
        return 0

    updated = (
        db.query(Product)
        .filter(Product.id.in_(product_ids))
        .update({getattr(Product, k): v for k, v in patch.items()},
                synchronize_session=False)
    )
    commit_or_raise(db, "update products")
    return updated


def bulk_update_price(db: Session, product_ids: List[UUID], price: Decimal) -> int:
    return update_products(db, product_ids, {"price": price})


def validate_patch(patch: dict) -> dict:
    unknown = set(patch) - set(ProductUpdate.model_fields)
    if unknown:
        raise ValidationError(f"Unknown product fields: {', '.join(sorted(unknown))}")
    try:
        cleaned = ProductUpdate(**patch)
    except pydantic.ValidationError as e:
        raise ValidationError("; ".join(err["msg"] for err in e.errors())) from e
    return {k: v for k, v in cleaned.model_dump(exclude_unset=True).items() if v is not None}


def get_all_tags(db: Session) -> List[str]:
    tags = set()
    for (product_tags,) in db.query(Product.tags).all():
        tags.update(product_tags or [])
    return sorted(tags)


class ProductStore:
    """Product lookups and writes used by the stock ledger."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, product_id) -> Optional[Product]:
        return get_product_by_id(self.db, product_id)

    def find_by_name(self, name: str) -> Optional[Product]:
        return get_product_by_name(self.db, name)

    def find_by_name_ci(self, name: str) -> Optional[Product]:
        return get_product_by_name_ci(self.db, name)

    def create(self, product: ProductCreate) -> Product:
        return create_product(self.db, product)

    def update_many(self, product_ids: List[UUID], patch: dict) -> int:
        return update_products(self.db, product_ids, validate_patch(patch))

    def distinct_tags(self) -> List[str]:
        return get_all_tags(self.db)
