# conftest.py — pytest config: in-memory SQLite and seeded data builders

import os
from datetime import datetime, timedelta, timezone

# Must be set before shared.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SALES_WINDOW_DAYS", "30")
os.environ.setdefault("DEFAULT_REORDER_THRESHOLD", "20")

import pytest
from fastapi.testclient import TestClient

from shared.core.database import Base, InventorySessionLocal, inventory_engine
from inventory_service.app.main import app
from inventory_service.app.models.companies import Company
from inventory_service.app.models.inventory import Inventory
from inventory_service.app.models.orders import Order, OrderItem
from inventory_service.app.models.products import Product
from inventory_service.app.models.suppliers import Supplier, SupplierProduct
from inventory_service.app.models.warehouses import Warehouse


class Seed:
    """Small builder for test rows. Every helper commits so request sessions see the data."""

    def __init__(self, db, now):
        self.db = db
        self.now = now

    def _add(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def company(self, name="Acme"):
        return self._add(Company(name=name))

    def warehouse(self, company, name="Main"):
        return self._add(Warehouse(company_id=company.id, name=name))

    def product(self, company, sku, name=None, threshold=None, price=10):
        return self._add(Product(
            company_id=company.id,
            sku=sku,
            name=name or f"Product {sku}",
            price=price,
            reorder_threshold=threshold,
        ))

    def stock(self, product, warehouse, quantity):
        return self._add(Inventory(
            product_id=product.id, warehouse_id=warehouse.id, quantity=quantity))

    def sale(self, company, product, quantity, days_ago=1, status="completed"):
        order = self._add(Order(
            company_id=company.id,
            status=status,
            order_date=self.now - timedelta(days=days_ago),
        ))
        self._add(OrderItem(order_id=order.id,
                  product_id=product.id, quantity=quantity))
        return order

    def supplier(self, product, name, priority=None, contact_info=None):
        supplier = self.db.query(Supplier).filter(
            Supplier.name == name).first()
        if supplier is None:
            supplier = self._add(
                Supplier(name=name, contact_info=contact_info))
        self._add(SupplierProduct(
            supplier_id=supplier.id, product_id=product.id, priority=priority))
        return supplier


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=inventory_engine)
    Base.metadata.create_all(bind=inventory_engine)
    session = InventorySessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def seed(db, now):
    return Seed(db, now)


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client
