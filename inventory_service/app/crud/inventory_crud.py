# app/crud/inventory_crud.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.inventory import InventoryRecord
from ..models.products import Product
from ..models.sales import Sale
from ..schemas.inventory_schemas import InventoryOut, InventorySummaryOut
from ..schemas.products_schemas import ProductOut
from .db_helper import commit_or_raise


def get_inventory(db: Session) -> List[InventoryOut]:
    rows = (
        db.query(InventoryRecord, Product)
        .outerjoin(Product, Product.id == InventoryRecord.product_id)
        .order_by(Product.name)
        .all()
    )

    return [
        InventoryOut(
            id=record.id,
            product_id=record.product_id,
            quantity_on_hand=record.quantity_on_hand,
            product=ProductOut.model_validate(product) if product else None,
        )
        for record, product in rows
    ]


def get_inventory_by_product(db: Session, product_id: UUID) -> Optional[InventoryRecord]:
    return db.query(InventoryRecord).filter(
        InventoryRecord.product_id == product_id
    ).first()


def save_inventory(db: Session, record: InventoryRecord) -> InventoryRecord:
    db.add(record)
    commit_or_raise(db, "save inventory record", record)
    return record


def get_inventory_summary(db: Session) -> List[InventorySummaryOut]:
    """On-hand stock next to what the sales log says was sold, per product."""
    sold = (
        db.query(
            Sale.product_id.label("product_id"),
            func.coalesce(func.sum(Sale.quantity), 0).label("items_sold"),
            func.coalesce(func.sum(Sale.total_amount), 0).label("revenue"),
        )
        .group_by(Sale.product_id)
        .subquery()
    )

    rows = (
        db.query(InventoryRecord, Product, sold.c.items_sold, sold.c.revenue)
        .outerjoin(Product, Product.id == InventoryRecord.product_id)
        .outerjoin(sold, sold.c.product_id == InventoryRecord.product_id)
        .order_by(Product.name)
        .all()
    )

    return [
        InventorySummaryOut(
            product_id=record.product_id,
            name=product.name if product else None,
            is_deprecated=product.is_deprecated if product else None,
            quantity_on_hand=record.quantity_on_hand,
            items_sold=int(items_sold or 0),
            revenue=float(revenue or 0),
        )
        for record, product, items_sold, revenue in rows
    ]


class InventoryStore:
    """Current-quantity records keyed by product, for the stock ledger."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_product_id(self, product_id) -> Optional[InventoryRecord]:
        return get_inventory_by_product(self.db, product_id)

    def save(self, record: InventoryRecord) -> InventoryRecord:
        return save_inventory(self.db, record)
