# app/crud/low_stock_crud.py
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..models.inventory import Inventory
from ..models.orders import Order, OrderItem
from ..models.products import Product
from ..models.suppliers import Supplier, SupplierProduct
from ..models.warehouses import Warehouse


def aggregate_recent_sales(
    db: Session,
    company_id: int,
    since: datetime,
    statuses: Iterable[str],
) -> Dict[int, int]:
    """
    Units sold per product since ``since`` for orders in one of ``statuses``.

    One grouped query. Products without sales are absent from the result.
    """
    units_sold = func.sum(func.coalesce(OrderItem.quantity, 0))

    rows = (
        db.query(
            OrderItem.product_id.label("product_id"),
            units_sold.label("units_sold"),
        )
        .join(Order, Order.id == OrderItem.order_id)
        .join(Product, Product.id == OrderItem.product_id)
        .filter(
            Order.company_id == company_id,
            Product.company_id == company_id,
            func.lower(Order.status).in_(list(statuses)),
            Order.order_date >= since,
        )
        .group_by(OrderItem.product_id)
        .having(units_sold > 0)
        .all()
    )

    sales = {}
    for row in rows:
        try:
            total = int(row.units_sold or 0)
        except (TypeError, ValueError):
            total = 0
        if total > 0:
            sales[row.product_id] = total
    return sales


def scan_company_inventory(
    db: Session,
    company_id: int,
    product_ids: Optional[Iterable[int]] = None,
) -> List:
    """Inventory rows of a company joined with product and warehouse attributes, in scan order."""
    query = (
        db.query(
            Inventory.id.label("inventory_id"),
            Inventory.product_id.label("product_id"),
            Inventory.warehouse_id.label("warehouse_id"),
            Inventory.quantity.label("quantity"),
            Product.name.label("product_name"),
            Product.sku.label("sku"),
            Product.reorder_threshold.label("reorder_threshold"),
            Warehouse.name.label("warehouse_name"),
        )
        .join(Product, Product.id == Inventory.product_id)
        .outerjoin(Warehouse, Warehouse.id == Inventory.warehouse_id)
        .filter(
            Product.company_id == company_id,
            or_(Warehouse.id.is_(None), Warehouse.company_id == company_id),
        )
    )
    if product_ids is not None:
        query = query.filter(Inventory.product_id.in_(list(product_ids)))

    return query.order_by(Inventory.id.asc()).all()


def fetch_product_suppliers(db: Session, product_ids: Iterable[int]) -> List:
    """Supplier links for the given products, best priority first."""
    product_ids = list(product_ids)
    if not product_ids:
        return []

    return (
        db.query(
            SupplierProduct.product_id.label("product_id"),
            Supplier.id.label("supplier_id"),
            Supplier.name.label("supplier_name"),
            Supplier.contact_info.label("contact_info"),
        )
        .join(Supplier, Supplier.id == SupplierProduct.supplier_id)
        .filter(SupplierProduct.product_id.in_(product_ids))
        .order_by(
            SupplierProduct.priority.asc().nulls_last(),
            SupplierProduct.id.asc(),
        )
        .all()
    )
