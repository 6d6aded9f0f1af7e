# tests/test_alerts_api.py
import pytest
from sqlalchemy.exc import OperationalError

from inventory_service.app.crud import low_stock_crud


def low_stock_url(company_id):
    return f"/api/companies/{company_id}/alerts/low-stock"


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}


def test_no_recent_sales_returns_empty_report(client, seed):
    company = seed.company()
    warehouse = seed.warehouse(company)
    # Scenario C: below the default threshold but nothing sold
    product = seed.product(company, "R-1", threshold=None)
    seed.stock(product, warehouse, 15)

    r = client.get(low_stock_url(company.id))

    assert r.status_code == 200
    assert r.json() == {"alerts": [], "total_alerts": 0}


def test_unknown_company_returns_empty_report(client, db):
    r = client.get(low_stock_url(999))

    assert r.status_code == 200
    assert r.json() == {"alerts": [], "total_alerts": 0}


def test_low_stock_alert_payload(client, seed):
    company = seed.company()
    warehouse = seed.warehouse(company, name="Main Warehouse")
    low = seed.product(company, "WID-001", name="Widget A", threshold=20)
    healthy = seed.product(company, "WID-002", name="Widget B", threshold=20)
    seed.stock(low, warehouse, 5)
    seed.stock(healthy, warehouse, 25)
    seed.sale(company, low, 60)
    seed.sale(company, healthy, 10)
    supplier = seed.supplier(low, "Supplier Corp", priority=1,
                             contact_info={"email": "orders@supplier.com"})

    r = client.get(low_stock_url(company.id))

    assert r.status_code == 200
    assert r.json() == {
        "alerts": [
            {
                "product_id": low.id,
                "product_name": "Widget A",
                "sku": "WID-001",
                "warehouse_id": warehouse.id,
                "warehouse_name": "Main Warehouse",
                "current_stock": 5,
                "threshold": 20,
                "days_until_stockout": 3,
                "supplier": {
                    "id": supplier.id,
                    "name": "Supplier Corp",
                    "contact_email": "orders@supplier.com",
                },
            }
        ],
        "total_alerts": 1,
    }


def test_lowest_priority_supplier_is_selected(client, seed):
    company = seed.company()
    warehouse = seed.warehouse(company)
    product = seed.product(company, "P-1", threshold=20)
    seed.stock(product, warehouse, 5)
    seed.sale(company, product, 60)
    seed.supplier(product, "Unranked")
    seed.supplier(product, "Second", priority=2)
    seed.supplier(product, "First", priority=1)

    body = client.get(low_stock_url(company.id)).json()

    assert body["alerts"][0]["supplier"]["name"] == "First"
    assert body["alerts"][0]["supplier"]["contact_email"] is None


def test_alerts_sorted_by_days_until_stockout(client, seed):
    company = seed.company()
    warehouse = seed.warehouse(company)
    for sku, stock, sold in [("A", 10, 30), ("B", 10, 150), ("C", 10, 60)]:
        product = seed.product(company, sku, threshold=20)
        seed.stock(product, warehouse, stock)
        seed.sale(company, product, sold)

    body = client.get(low_stock_url(company.id)).json()

    days = [a["days_until_stockout"] for a in body["alerts"]]
    assert [a["sku"] for a in body["alerts"]] == ["B", "C", "A"]
    assert days == sorted(days)
    assert body["total_alerts"] == len(body["alerts"]) == 3


@pytest.mark.parametrize("company_id", [
    "abc", "0", "-3", "1.5", "\u00b2", "2147483648", "99999999999999999999"])
def test_invalid_company_id(client, company_id, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("data store should not be queried")

    monkeypatch.setattr(low_stock_crud, "aggregate_recent_sales", fail)

    r = client.get(low_stock_url(company_id))

    assert r.status_code == 400
    assert r.json() == {"error": "invalid company id"}


def test_data_store_failure_returns_generic_error(client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT ...", {}, Exception("connection refused"))

    monkeypatch.setattr(low_stock_crud, "aggregate_recent_sales", broken)

    r = client.get(low_stock_url(1))

    assert r.status_code == 500
    assert r.json() == {"error": "internal server error"}


def seed_low_stock_company(seed):
    company = seed.company()
    warehouse = seed.warehouse(company)
    product = seed.product(company, "P-1", threshold=20)
    seed.stock(product, warehouse, 5)
    seed.sale(company, product, 60)
    seed.supplier(product, "Supplier Corp", priority=1)
    return company


@pytest.mark.parametrize("step", ["scan_company_inventory", "fetch_product_suppliers"])
def test_later_step_failure_returns_generic_error(client, seed, monkeypatch, step):
    company = seed_low_stock_company(seed)

    def broken(*args, **kwargs):
        raise OperationalError("SELECT ...", {}, Exception("connection reset"))

    monkeypatch.setattr(low_stock_crud, step, broken)

    r = client.get(low_stock_url(company.id))

    assert r.status_code == 500
    assert r.json() == {"error": "internal server error"}


def test_repeated_requests_return_identical_reports(client, seed):
    company = seed_low_stock_company(seed)

    first = client.get(low_stock_url(company.id))
    second = client.get(low_stock_url(company.id))

    assert first.status_code == second.status_code == 200
    assert first.json()["total_alerts"] == 1
    assert first.json() == second.json()
