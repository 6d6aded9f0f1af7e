import logging
from decimal import Decimal
from typing import Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import INTERNAL_ERROR_MESSAGE, error_response
from shared.utils.enums import InventoryChangeReason
from ..crud import products_crud as crud
from ..models.inventory import Inventory
from ..models.products import Product
from ..schemas.products_schemas import ProductCreate, ProductCreateResponse

logger = logging.getLogger(__name__)


def _upsert_inventory(db: Session, product_id: int, warehouse_id: int, quantity: int) -> Inventory:
    inventory = crud.get_inventory_for_update(db, product_id, warehouse_id)
    if inventory:
        old_quantity = inventory.quantity or 0
        inventory.quantity = old_quantity + quantity
        reason = InventoryChangeReason.RESTOCK.value
    else:
        old_quantity = 0
        inventory = Inventory(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity
        )
        db.add(inventory)
        reason = InventoryChangeReason.INITIAL_STOCK.value

    db.flush()  # inventory.id for the audit row
    if inventory.quantity != old_quantity:
        crud.add_inventory_audit(db, inventory, old_quantity, reason)
    return inventory


def create_product(db: Session, payload: ProductCreate) -> Tuple[ProductCreateResponse, int]:
    """
    Create a product with its first inventory row, or restock it if the SKU exists.

    Returns the response body and the HTTP status (201 created, 200 updated).
    Everything happens in one transaction.
    """
    warehouse = crud.get_warehouse_by_id(db, payload.warehouse_id)
    if not warehouse:
        error_response("warehouse not found", http_status=404)

    try:
        product = crud.get_product_by_sku_for_update(
            db, warehouse.company_id, payload.sku)

        if product:
            product.name = payload.name
            if payload.price is not None:
                product.price = payload.price
            if payload.reorder_threshold is not None:
                product.reorder_threshold = payload.reorder_threshold

            _upsert_inventory(db, product.id, warehouse.id,
                              payload.initial_quantity)
            db.commit()
            logger.info("Restocked product %s (sku=%s) in warehouse %s by %s",
                        product.id, product.sku, warehouse.id, payload.initial_quantity)
            return ProductCreateResponse(
                message="Existing product - inventory updated",
                product_id=product.id
            ), 200

        product = Product(
            company_id=warehouse.company_id,
            sku=payload.sku,
            name=payload.name,
            price=payload.price if payload.price is not None else Decimal("0.00"),
            reorder_threshold=payload.reorder_threshold
        )
        db.add(product)
        db.flush()  # product.id

        _upsert_inventory(db, product.id, warehouse.id,
                          payload.initial_quantity)
        db.commit()
        logger.info("Created product %s (sku=%s) for company %s",
                    product.id, product.sku, warehouse.company_id)
        return ProductCreateResponse(message="Product created", product_id=product.id), 201

    except IntegrityError:
        db.rollback()
        logger.warning("Integrity error creating product sku=%s", payload.sku)
        error_response("sku already exists", http_status=409)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error creating product sku=%s", payload.sku)
        error_response(INTERNAL_ERROR_MESSAGE, http_status=500)
