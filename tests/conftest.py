"""Pytest configuration and fixtures for the inventory and auth services."""

import uuid
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.auth import create_access_token
from shared.core.database import Base, get_db
from shared.models.users import Users
from auth_service.app.main import app as auth_app
from inventory_service.app.main import app as inventory_app
from inventory_service.app.core.exceptions import DependencyError
from inventory_service.app.crud.inventory_crud import InventoryStore
from inventory_service.app.crud.products_crud import ProductStore
from inventory_service.app.crud.sales_crud import SaleStore
from inventory_service.app.models.inventory import InventoryRecord
from inventory_service.app.models.products import Product
from inventory_service.app.schemas.products_schemas import ProductCreate
from inventory_service.app.services.stock_ledger import StockLedger

ADMIN_EMAIL = "owner@example.com"
ADMIN_PASSWORD = "secret123"


# ----------------- In-memory stores -----------------


class FakeProductStore:
    def __init__(self):
        self.items = {}

    def add(self, name="Widget", price="0", tags=None, product_id=None):
        product = Product(
            id=product_id or uuid.uuid4(),
            name=name,
            tags=tags or [],
            price=Decimal(price),
            is_deprecated=False,
        )
        self.items[product.id] = product
        return product

    def find_by_id(self, product_id):
        return self.items.get(product_id)

    def find_by_name(self, name):
        return next((p for p in self.items.values() if p.name == name), None)

    def find_by_name_ci(self, name):
        return next((p for p in self.items.values() if p.name.lower() == name.lower()), None)

    def create(self, product: ProductCreate):
        created = Product(id=uuid.uuid4(), **product.model_dump())
        self.items[created.id] = created
        return created

    def update_many(self, product_ids, patch):
        updated = 0
        for product_id in product_ids:
            if product_id in self.items:
                for field, value in patch.items():
                    setattr(self.items[product_id], field, value)
                updated += 1
        return updated

    def distinct_tags(self):
        return sorted({t for p in self.items.values() for t in p.tags})


class FakeInventoryStore:
    def __init__(self):
        self.records = {}
        self.saves = 0

    def find_by_product_id(self, product_id):
        return self.records.get(product_id)

    def save(self, record: InventoryRecord):
        if record.id is None:
            record.id = uuid.uuid4()
        self.records[record.product_id] = record
        self.saves += 1
        return record


class FakeSaleStore:
    def __init__(self):
        self.sales = []
        self.fail_on_save = False

    def save(self, sale):
        if self.fail_on_save:
            raise DependencyError("sales store is down")
        if sale.id is None:
            sale.id = uuid.uuid4()
        self.sales.append(sale)
        return sale

    def find_all(self, params=None):
        return list(self.sales)


@pytest.fixture
def fake_ledger():
    """StockLedger over in-memory stores; the stores hang off the ledger."""
    return StockLedger(FakeProductStore(), FakeInventoryStore(), FakeSaleStore())


# ----------------- Database -----------------


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean in-memory SQLite session for each test function."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = Session()

    yield db

    db.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_ledger(test_db):
    return StockLedger(ProductStore(test_db), InventoryStore(test_db), SaleStore(test_db))


@pytest.fixture
def make_product(test_db):
    def _make(name="Widget", price="0", tags=None, is_deprecated=False):
        product = Product(
            name=name,
            tags=tags or [],
            price=Decimal(price),
            is_deprecated=is_deprecated,
        )
        test_db.add(product)
        test_db.commit()
        test_db.refresh(product)
        return product
    return _make


@pytest.fixture
def admin_user(test_db):
    user = Users(status="active")
    user.set_email(ADMIN_EMAIL)
    user.set_password(ADMIN_PASSWORD)
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


@pytest.fixture
def auth_headers(admin_user):
    token = create_access_token({"user_id": str(admin_user.id), "email": admin_user.email})
    return {"Authorization": f"Bearer {token}"}


def _override_db(app, db):
    def override_get_db():
        yield db
    app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client(test_db):
    _override_db(inventory_app, test_db)
    yield TestClient(inventory_app)
    inventory_app.dependency_overrides.clear()


@pytest.fixture
def auth_client(test_db):
    _override_db(auth_app, test_db)
    yield TestClient(auth_app)
    auth_app.dependency_overrides.clear()
