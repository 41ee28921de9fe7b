# app/crud/sales_crud.py
from typing import List
from sqlalchemy.orm import Session

from shared.core.schemas import ExportResponse
from shared.exporthelper import export_to_excel
from ..models.products import Product
from ..models.sales import Sale
from ..schemas.sales_schemas import SaleQueryParams
from .db_helper import commit_or_raise


def _filtered_sales_query(db: Session, params: SaleQueryParams):
    query = db.query(Sale)

    if params.product_id:
        query = query.filter(Sale.product_id == params.product_id)

    if params.channel:
        query = query.filter(Sale.channel == params.channel)

    if params.start_date:
        query = query.filter(Sale.date_time >= params.start_date)

    if params.end_date:
        query = query.filter(Sale.date_time <= params.end_date)

    return query


def get_sales(db: Session, params: SaleQueryParams) -> List[Sale]:
    query = _filtered_sales_query(db, params).order_by(Sale.date_time.desc())
    query = query.offset(params.skip or 0)
    if params.limit:
        query = query.limit(params.limit)
    return query.all()


def save_sale(db: Session, sale: Sale) -> Sale:
    db.add(sale)
    commit_or_raise(db, "save sale", sale)
    return sale


def export_sales(db: Session, params: SaleQueryParams) -> ExportResponse:
    rows = (
        _filtered_sales_query(db, params)
        .outerjoin(Product, Product.id == Sale.product_id)
        .with_entities(Sale, Product.name)
        .order_by(Sale.date_time.desc())
        .all()
    )

    data = [
        {
            "date_time": sale.date_time.isoformat() if sale.date_time else None,
            "product_name": product_name,
            "quantity": sale.quantity,
            "sale_price": float(sale.sale_price),
            "total_amount": float(sale.total_amount),
            "channel": sale.channel,
            "channel_order_id": sale.channel_order_id,
        }
        for sale, product_name in rows
    ]

    return export_to_excel(
        data,
        filename="sales.xlsx",
        column_map={
            "date_time": "Date",
            "product_name": "Product",
            "quantity": "Qty",
            "sale_price": "Price",
            "total_amount": "Total",
            "channel": "Channel",
            "channel_order_id": "Order ID",
        },
    )


class SaleStore:
    """Append-only sales log for the stock ledger."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, sale: Sale) -> Sale:
        return save_sale(self.db, sale)

    def find_all(self, params: SaleQueryParams | None = None) -> List[Sale]:
        return get_sales(self.db, params or SaleQueryParams())
