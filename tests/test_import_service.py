"""Tests for bulk product import, CSV parsing, Etsy sales import and bulk sales."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from inventory_service.app.core.exceptions import ValidationError
from inventory_service.app.models.sales import Sale
from inventory_service.app.schemas.import_schemas import EtsyReceiptItem, ImportItem
from inventory_service.app.schemas.sales_schemas import BulkSaleItem
from inventory_service.app.services.import_service import (
    import_etsy_sales,
    import_products,
    parse_inventory_csv,
    record_bulk_sales,
)

HEADER = "Name,#,# SOLD,Format,Tags,Deprecated\n"


class TestImportProducts:

    def test_sold_count_is_logged_but_not_subtracted(self, fake_ledger):
        result = import_products(fake_ledger, [
            ImportItem(name="Mug", initial_quantity=10, sold_quantity=3),
        ])

        assert result.imported_count == 1
        assert result.error_count == 0
        mug = fake_ledger.products.find_by_name("Mug")
        assert fake_ledger.get_quantity(mug.id) == 10
        assert len(fake_ledger.sales.sales) == 1
        sale = fake_ledger.sales.sales[0]
        assert sale.quantity == 3
        assert sale.channel == "csv_import"

    def test_no_sale_for_zero_sold(self, fake_ledger):
        import_products(fake_ledger, [ImportItem(name="Mug", initial_quantity=4)])
        assert fake_ledger.sales.sales == []

    def test_existing_product_is_reused(self, fake_ledger):
        existing = fake_ledger.products.add(name="Mug", price="8.00")

        result = import_products(fake_ledger, [
            ImportItem(name="Mug", initial_quantity=6, sold_quantity=2),
        ])

        assert result.imported_count == 1
        assert len(fake_ledger.products.items) == 1
        assert fake_ledger.get_quantity(existing.id) == 6
        assert fake_ledger.sales.sales[0].total_amount == Decimal("16.00")

    def test_continues_past_bad_items(self, fake_ledger):
        result = import_products(fake_ledger, [
            ImportItem(name="Mug", initial_quantity=1, sold_quantity=4),
            ImportItem(name="   ", initial_quantity=2, sold_quantity=5),
            ImportItem(name="Bowl", initial_quantity=3, sold_quantity=6),
        ])

        assert result.imported_count == 2
        assert result.error_count == 1
        assert len(result.messages) == 3
        assert result.messages[0] == "Successfully imported product: Mug"
        assert result.messages[1].startswith("Error importing")

        mug = fake_ledger.products.find_by_name("Mug")
        bowl = fake_ledger.products.find_by_name("Bowl")
        assert len(fake_ledger.products.items) == 2
        assert fake_ledger.get_quantity(mug.id) == 1
        assert fake_ledger.get_quantity(bowl.id) == 3
        assert len(fake_ledger.inventory.records) == 2
        assert sorted((s.product_id, s.quantity) for s in fake_ledger.sales.sales) == sorted(
            [(mug.id, 4), (bowl.id, 6)])

    def test_new_product_takes_tags_and_flags(self, fake_ledger):
        import_products(fake_ledger, [
            ImportItem(name="Vase", tags=["ceramic", " ceramic ", "blue"],
                       deprecated=True, price=Decimal("12.5")),
        ])

        vase = fake_ledger.products.find_by_name("Vase")
        assert vase.tags == ["ceramic", "blue"]
        assert vase.is_deprecated is True
        assert vase.price == Decimal("12.5")

    def test_against_database(self, db_ledger, test_db):
        result = import_products(db_ledger, [
            ImportItem(name="Mug", initial_quantity=10, sold_quantity=3),
            ImportItem(name="Mug", initial_quantity=7),
        ])

        assert result.imported_count == 2
        mug = db_ledger.products.find_by_name("Mug")
        assert db_ledger.get_quantity(mug.id) == 7
        assert test_db.query(Sale).count() == 1


class TestParseInventoryCsv:

    def test_parses_rows(self):
        items = parse_inventory_csv(
            HEADER
            + "Mug,5,2,Ceramic,kitchen,No\n"
            + "Old Vase,1,0,Glass,,Yes\n"
        )

        assert len(items) == 2
        assert items[0].name == "Mug"
        assert items[0].initial_quantity == 5
        assert items[0].sold_quantity == 2
        assert items[0].tags == ["Ceramic", "kitchen"]
        assert items[0].deprecated is False
        assert items[1].tags == ["Glass"]
        assert items[1].deprecated is True

    def test_quantities_are_lenient(self):
        items = parse_inventory_csv(HEADER + "Mug,3 pcs,n/a,,,true\n")

        assert items[0].initial_quantity == 3
        assert items[0].sold_quantity == 0
        assert items[0].tags == []
        assert items[0].deprecated is True

    def test_blank_lines_are_skipped(self):
        items = parse_inventory_csv(HEADER + "\nMug,1,0,,,\n\n")
        assert [i.name for i in items] == ["Mug"]

    def test_wrong_column_count(self):
        with pytest.raises(ValidationError, match="exactly 6 columns"):
            parse_inventory_csv("Name,#,# SOLD\nMug,1,2\n")

    @pytest.mark.parametrize("text", ["", "   ", HEADER])
    def test_needs_header_and_data(self, text):
        with pytest.raises(ValidationError):
            parse_inventory_csv(text)

    def test_rejects_row_with_extra_value(self):
        with pytest.raises(ValidationError, match="Row 2 has 7 values"):
            parse_inventory_csv(HEADER + "Mug,5,2,Ceramic,kitchen,No,extra\n")

    def test_rejects_extra_value_after_good_rows(self):
        with pytest.raises(ValidationError, match="Row 3 has 7 values"):
            parse_inventory_csv(
                HEADER
                + "Mug,5,2,Ceramic,kitchen,No\n"
                + "Bowl,1,0,Ceramic,kitchen,No,extra\n"
            )

    def test_rejects_short_row(self):
        with pytest.raises(ValidationError, match="Row 2 has 4 values"):
            parse_inventory_csv(HEADER + "Mug,5,2,Ceramic\n")

    def test_quoted_commas_stay_in_one_value(self):
        items = parse_inventory_csv(HEADER + '"Mug, large",5,2,Ceramic,"kitchen",No\n')

        assert items[0].name == "Mug, large"
        assert items[0].initial_quantity == 5


class TestImportEtsySales:

    def test_matches_existing_product_ignoring_case(self, fake_ledger):
        mug = fake_ledger.products.add(name="Blue Mug", price="10")
        fake_ledger.upsert(mug.id, 5)

        result = import_etsy_sales(fake_ledger, [
            EtsyReceiptItem(title="blue mug", price=Decimal("9.50"), quantity=2,
                            receipt_id=12345, created_timestamp=1700000000),
        ])

        assert result.imported == 1
        assert result.errors == 0
        sale = fake_ledger.sales.sales[0]
        assert sale.product_id == mug.id
        assert sale.channel == "etsy"
        assert sale.channel_order_id == "12345"
        assert sale.total_amount == Decimal("19.00")
        assert sale.date_time == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        # Imported sales leave stock alone
        assert fake_ledger.get_quantity(mug.id) == 5
        assert result.imported_sales[0].channel_order_id == "12345"

    def test_unknown_title_creates_product_with_empty_stock(self, fake_ledger):
        result = import_etsy_sales(fake_ledger, [
            EtsyReceiptItem(title="Night Light", price=Decimal("30"), quantity=1,
                            tags=["lamp"]),
        ])

        assert result.imported == 1
        product = fake_ledger.products.find_by_name("Night Light")
        assert product.tags == ["lamp"]
        assert product.price == Decimal("30")
        assert fake_ledger.get_quantity(product.id) == 0
        assert fake_ledger.sales.sales[0].channel_order_id is None

    def test_failures_are_reported_per_line(self, fake_ledger):
        result = import_etsy_sales(fake_ledger, [
            EtsyReceiptItem(title="  ", quantity=1),
            EtsyReceiptItem(title="Candle", quantity=1),
        ])

        assert result.imported == 1
        assert result.errors == 1
        assert result.failures[0].error == "Etsy listing title is required"

    def test_fractional_timestamp(self, fake_ledger):
        result = import_etsy_sales(fake_ledger, [
            EtsyReceiptItem(title="Candle", quantity=1, created_timestamp=1700000000.25),
        ])

        assert result.imported == 1
        sale = fake_ledger.sales.sales[0]
        assert sale.date_time == datetime.fromtimestamp(1700000000.25, tz=timezone.utc)

    def test_out_of_range_timestamp_fails_only_that_line(self, fake_ledger):
        result = import_etsy_sales(fake_ledger, [
            EtsyReceiptItem(title="Candle", quantity=1, created_timestamp=1700000000),
            EtsyReceiptItem(title="Lamp", quantity=1, created_timestamp=1700000000000000),
            EtsyReceiptItem(title="Soap", quantity=2, created_timestamp=1700000100),
        ])

        assert result.imported == 2
        assert result.errors == 1
        assert result.failures[0].title == "Lamp"
        assert "created_timestamp" in result.failures[0].error
        assert fake_ledger.products.find_by_name("Lamp") is None
        assert [s.quantity for s in fake_ledger.sales.sales] == [1, 2]


class TestRecordBulkSales:

    def test_sells_each_item_at_list_price(self, fake_ledger):
        mug = fake_ledger.products.add(name="Mug", price="6.00")
        fake_ledger.upsert(mug.id, 4)

        result = record_bulk_sales(fake_ledger, "retail", [
            BulkSaleItem(product_id=mug.id, quantity=3),
        ])

        assert result.processed_count == 1
        assert result.messages == ["Sold 3 x Mug"]
        assert fake_ledger.get_quantity(mug.id) == 1
        assert fake_ledger.sales.sales[0].total_amount == Decimal("18.00")

    def test_continues_past_insufficient_and_unknown(self, fake_ledger):
        mug = fake_ledger.products.add(name="Mug", price="6.00")
        bowl = fake_ledger.products.add(name="Bowl", price="4.00")
        fake_ledger.upsert(mug.id, 1)
        fake_ledger.upsert(bowl.id, 5)
        missing = uuid.uuid4()

        result = record_bulk_sales(fake_ledger, "retail", [
            BulkSaleItem(product_id=mug.id, quantity=2),
            BulkSaleItem(product_id=missing, quantity=1),
            BulkSaleItem(product_id=bowl.id, quantity=2),
        ])

        assert result.processed_count == 1
        assert result.error_count == 2
        assert result.messages[0] == f"Error selling {mug.id}: Insufficient inventory"
        assert result.messages[1].startswith(f"Error selling {missing}")
        assert fake_ledger.get_quantity(mug.id) == 1
        assert fake_ledger.get_quantity(bowl.id) == 3
