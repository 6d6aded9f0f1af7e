# app/routers/products_router.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from shared.core.database import get_inventory_db as get_db
from ..schemas.products_schemas import ProductCreate, ProductCreateResponse
from ..services import product_service

router = APIRouter(prefix="/api/products", tags=["products"])


# -------create-------------------------------

@router.post("", response_model=ProductCreateResponse, status_code=201)
def create_product(
    product: ProductCreate,
    response: Response,
    db: Session = Depends(get_db)
):
    body, status_code = product_service.create_product(db, product)
    response.status_code = status_code
    return body
