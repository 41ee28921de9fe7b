"""Stock ledger: on-hand quantities per product, and the rule that stock
taken out of inventory shows up in the sales log.

There are two ways to take stock out, and they are deliberately not equally
strict:

- ``adjust`` (manual correction) lets stock go negative and records the sale
  on a best-effort basis: if writing the sale fails, the failure is logged and
  the quantity change still goes through.
- ``create_sale_and_adjust`` (explicit sale entry) refuses to sell more than
  is on hand and writes the sale before touching the quantity.

Neither path locks the inventory row. Two concurrent adjustments of the same
product can read the same quantity and the last write wins.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from shared.core.database import get_db
from shared.utils.enums import SaleChannel
from ..core.exceptions import (
    InsufficientInventoryError,
    NotFoundError,
    ValidationError,
)
from ..crud.inventory_crud import InventoryStore
from ..crud.products_crud import ProductStore
from ..crud.sales_crud import SaleStore
from ..models.inventory import InventoryRecord
from ..models.sales import Sale

logger = logging.getLogger(__name__)


def _as_decimal(value, field: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (ArithmeticError, ValueError) as e:
        raise ValidationError(f"{field} must be a number") from e
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field} must be a non-negative number")
    return amount


def _as_int(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    return value


class StockLedger:

    def __init__(self, products: ProductStore, inventory: InventoryStore, sales: SaleStore):
        self.products = products
        self.inventory = inventory
        self.sales = sales

    def get_quantity(self, product_id) -> int:
        record = self.get_record(product_id)
        return record.quantity_on_hand

    def get_record(self, product_id) -> InventoryRecord:
        record = self.inventory.find_by_product_id(product_id)
        if record is None:
            raise NotFoundError("Inventory record for product", product_id)
        return record

    def upsert(self, product_id, quantity: int) -> InventoryRecord:
        """Set the absolute on-hand quantity. Never records a sale."""
        quantity = _as_int(quantity, "quantity")

        record = self.inventory.find_by_product_id(product_id)
        if record is None:
            if self.products.find_by_id(product_id) is None:
                raise NotFoundError("Product", product_id)
            record = InventoryRecord(product_id=product_id, quantity_on_hand=quantity)
        else:
            record.quantity_on_hand = quantity

        return self.inventory.save(record)

    def adjust(self, product_id, delta: int) -> InventoryRecord:
        """Apply a signed delta. A negative delta is logged as a manual sale."""
        delta = _as_int(delta, "adjustment")

        record = self.get_record(product_id)
        new_quantity = record.quantity_on_hand + delta

        if delta < 0:
            self._record_manual_sale(product_id, -delta)

        record.quantity_on_hand = new_quantity
        return self.inventory.save(record)

    def _record_manual_sale(self, product_id, quantity: int) -> Optional[Sale]:
        # Best effort: the adjustment must go through even if this fails
        try:
            product = self.products.find_by_id(product_id)
            if product is None:
                logger.warning(
                    "No product %s for manual adjustment, sale not recorded", product_id)
                return None

            price = Decimal(str(product.price or 0))
            sale = Sale(
                product_id=product_id,
                quantity=quantity,
                sale_price=price,
                total_amount=price * quantity,
                channel=SaleChannel.MANUAL.value,
                date_time=datetime.now(timezone.utc),
            )
            return self.sales.save(sale)
        except Exception:
            logger.exception(
                "Failed to record sale for adjustment of product %s, inventory will still be adjusted",
                product_id)
            return None

    def create_sale_and_adjust(
        self,
        product_id,
        quantity: int,
        unit_price,
        channel: str,
        channel_order_id: Optional[str] = None,
        total_amount=None,
        date_time: Optional[datetime] = None,
    ) -> Sale:
        """Record a sale and take its quantity out of stock.

        Raises InsufficientInventoryError, before writing anything, when the
        product has no inventory record or fewer units on hand than sold.
        """
        quantity = _as_int(quantity, "quantity")
        if quantity <= 0:
            raise ValidationError("quantity must be a positive integer")
        price = _as_decimal(unit_price, "sale_price")
        total = price * quantity if total_amount is None else _as_decimal(
            total_amount, "total_amount")
        if not channel or not channel.strip():
            raise ValidationError("channel is required")

        record = self.inventory.find_by_product_id(product_id)
        if record is None or record.quantity_on_hand < quantity:
            raise InsufficientInventoryError(
                product_id, quantity, record.quantity_on_hand if record else None)

        sale = self.sales.save(Sale(
            product_id=product_id,
            quantity=quantity,
            sale_price=price,
            total_amount=total,
            channel=channel.strip(),
            channel_order_id=channel_order_id,
            date_time=date_time or datetime.now(timezone.utc),
        ))

        record.quantity_on_hand = record.quantity_on_hand - quantity
        self.inventory.save(record)
        return sale


def get_ledger(db: Session = Depends(get_db)) -> StockLedger:
    return StockLedger(ProductStore(db), InventoryStore(db), SaleStore(db))
