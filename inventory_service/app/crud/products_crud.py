# app/crud/products_crud.py
from typing import Optional
from sqlalchemy.orm import Session

from ..models.inventory import Inventory, InventoryAudit
from ..models.products import Product
from ..models.warehouses import Warehouse


def get_warehouse_by_id(db: Session, warehouse_id: int) -> Optional[Warehouse]:
    return db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()


def get_product_by_sku_for_update(db: Session, company_id: int, sku: str) -> Optional[Product]:
    return (
        db.query(Product)
        .filter(Product.company_id == company_id, Product.sku == sku)
        .with_for_update()
        .first()
    )


def get_inventory_for_update(db: Session, product_id: int, warehouse_id: int) -> Optional[Inventory]:
    return (
        db.query(Inventory)
        .filter(
            Inventory.product_id == product_id,
            Inventory.warehouse_id == warehouse_id
        )
        .with_for_update()
        .first()
    )


def add_inventory_audit(
    db: Session,
    inventory: Inventory,
    old_quantity: int,
    reason: str,
) -> InventoryAudit:
    audit = InventoryAudit(
        inventory_id=inventory.id,
        old_quantity=old_quantity,
        new_quantity=inventory.quantity,
        change_amount=inventory.quantity - old_quantity,
        reason=reason
    )
    db.add(audit)
    return audit
