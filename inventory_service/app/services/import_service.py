"""Batch entry points built on the stock ledger.

Every batch runs its items one at a time and keeps going past failed items;
the returned result lists what happened to each one.
"""
import csv
import io
import logging
import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List

import pandas as pd
import pydantic

from shared.utils.enums import SaleChannel
from ..core.exceptions import LedgerError, NotFoundError, ValidationError
from ..models.sales import Sale
from ..schemas.import_schemas import (
    EtsyImportFailure,
    EtsyImportResult,
    EtsyReceiptItem,
    ImportItem,
    ImportResult,
)
from ..schemas.products_schemas import ProductCreate, normalize_tags
from ..schemas.sales_schemas import BulkSaleItem, BulkSaleResult, SaleOut
from .stock_ledger import StockLedger

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Name", "#", "# SOLD", "Format", "Tags", "Deprecated"]
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ----------------- Product import -----------------


def _new_product(**fields) -> ProductCreate:
    try:
        return ProductCreate(**fields)
    except pydantic.ValidationError as e:
        raise ValidationError("; ".join(err["msg"] for err in e.errors())) from e


def import_products(ledger: StockLedger, items: Iterable[ImportItem]) -> ImportResult:
    """Create (or reuse by name) each product, set its stock to the initial
    quantity and log the sold count as one historical sale.

    The sold count is not taken out of the freshly set stock.
    """
    result = ImportResult()

    for item in items:
        try:
            _import_one(ledger, item)
        except LedgerError as e:
            result.error_count += 1
            result.messages.append(f"Error importing {item.name}: {e}")
            logger.warning("Error importing item %r: %s", item.name, e)
            continue

        result.imported_count += 1
        result.messages.append(f"Successfully imported product: {item.name}")

    return result


def _import_one(ledger: StockLedger, item: ImportItem):
    name = (item.name or "").strip()
    if not name:
        raise ValidationError("Product name is required")

    product = ledger.products.find_by_name(name)
    if product is None:
        product = ledger.products.create(_new_product(
            name=name,
            tags=item.tags,
            price=item.price if item.price is not None else Decimal("0"),
            is_deprecated=item.deprecated,
        ))
    else:
        logger.info("Reusing existing product %s for import of %r", product.id, name)

    ledger.upsert(product.id, item.initial_quantity)

    if item.sold_quantity > 0:
        price = Decimal(str(product.price or 0))
        ledger.sales.save(Sale(
            product_id=product.id,
            quantity=item.sold_quantity,
            sale_price=price,
            total_amount=price * item.sold_quantity,
            channel=SaleChannel.CSV_IMPORT.value,
            date_time=datetime.now(timezone.utc),
        ))


def _lenient_int(value: str) -> int:
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else 0


def parse_inventory_csv(text: str) -> List[ImportItem]:
    """Parse an inventory sheet with the columns
    ``Name, #, # SOLD, Format, Tags, Deprecated``.

    Format and Tags both become product tags. Unparseable quantities count as
    0. Raises ValidationError for an empty sheet or when the header or any
    data row does not have exactly six values.
    """
    if not text or not text.strip():
        raise ValidationError("CSV must have at least a header row and one data row")

    # Widths are checked here: read_csv pads short rows and takes an extra
    # leading value as the index
    reader = csv.reader(io.StringIO(text), skipinitialspace=True)
    try:
        rows = [(reader.line_num, row) for row in reader
                if any(cell.strip() for cell in row)]
    except csv.Error as e:
        raise ValidationError(f"Could not parse CSV: {e}") from e

    if not rows:
        raise ValidationError("CSV must have at least a header row and one data row")

    (_, header), data = rows[0], rows[1:]
    if len(header) != len(CSV_COLUMNS):
        raise ValidationError(
            f"CSV must have exactly {len(CSV_COLUMNS)} columns: {', '.join(CSV_COLUMNS)}")

    if not data:
        raise ValidationError("CSV must have at least a header row and one data row")

    for line, row in data:
        if len(row) != len(CSV_COLUMNS):
            raise ValidationError(
                f"Row {line} has {len(row)} values, expected {len(CSV_COLUMNS)}")

    df = pd.DataFrame([row for _, row in data], columns=CSV_COLUMNS, dtype=str)
    df = df.apply(lambda column: column.str.strip())

    return [
        ImportItem(
            name=record["Name"],
            initial_quantity=_lenient_int(record["#"]),
            sold_quantity=_lenient_int(record["# SOLD"]),
            tags=normalize_tags([record["Format"], record["Tags"]]),
            deprecated=record["Deprecated"].lower() in ("yes", "true"),
        )
        for record in df.to_dict(orient="records")
    ]


# ----------------- Etsy sales import -----------------


def import_etsy_sales(ledger: StockLedger, receipts: Iterable[EtsyReceiptItem]) -> EtsyImportResult:
    """Log already-fetched Etsy receipt lines as sales.

    Unknown titles get a new product with an empty stock record. Stock is not
    reduced for imported sales.
    """
    result = EtsyImportResult()

    for receipt in receipts:
        try:
            sale = _import_etsy_receipt(ledger, receipt)
        except LedgerError as e:
            logger.warning("Error importing Etsy sale %r: %s", receipt.title, e)
            result.errors += 1
            result.failures.append(EtsyImportFailure(title=receipt.title, error=str(e)))
            continue

        result.imported += 1
        result.imported_sales.append(SaleOut.model_validate(sale))

    return result


def _sold_at(timestamp) -> datetime:
    if timestamp is None:
        return datetime.now(timezone.utc)
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise ValidationError(f"Invalid created_timestamp {timestamp}: {e}") from e


def _import_etsy_receipt(ledger: StockLedger, receipt: EtsyReceiptItem) -> Sale:
    title = receipt.title.strip()
    if not title:
        raise ValidationError("Etsy listing title is required")

    sold_at = _sold_at(receipt.created_timestamp)

    product = ledger.products.find_by_name_ci(title)
    if product is None:
        product = ledger.products.create(_new_product(
            name=title,
            tags=receipt.tags,
            price=receipt.price,
        ))
        ledger.upsert(product.id, 0)

    return ledger.sales.save(Sale(
        product_id=product.id,
        quantity=receipt.quantity,
        sale_price=receipt.price,
        total_amount=receipt.price * receipt.quantity,
        channel=SaleChannel.ETSY.value,
        channel_order_id=str(receipt.receipt_id) if receipt.receipt_id is not None else None,
        date_time=sold_at,
    ))


# ----------------- Bulk sales entry -----------------


def record_bulk_sales(ledger: StockLedger, channel: str, items: Iterable[BulkSaleItem]) -> BulkSaleResult:
    """Sell several products at their list price through one channel."""
    result = BulkSaleResult(processed_count=0, error_count=0, messages=[])

    for item in items:
        try:
            product = ledger.products.find_by_id(item.product_id)
            if product is None:
                raise NotFoundError("Product", item.product_id)
            ledger.create_sale_and_adjust(
                item.product_id, item.quantity, product.price, channel)
        except LedgerError as e:
            result.error_count += 1
            result.messages.append(f"Error selling {item.product_id}: {e}")
            continue

        result.processed_count += 1
        result.messages.append(f"Sold {item.quantity} x {product.name}")

    return result
