from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# ---------------- Product Create ----------------
class ProductCreate(BaseModel):
    sku: str = Field(..., max_length=100)
    name: str = Field(..., max_length=255)
    warehouse_id: int = Field(..., gt=0)
    initial_quantity: int = Field(default=0, ge=0)
    price: Optional[Decimal] = None
    reorder_threshold: Optional[int] = Field(default=None, ge=0)

    @field_validator("sku", "name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("price")
    @classmethod
    def valid_price(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is None:
            return None
        if not value.is_finite():
            raise ValueError("invalid price format")
        if value < 0:
            raise ValueError("price must be non-negative")
        return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


# ---------------- Product Create Output ----------------
class ProductCreateResponse(BaseModel):
    message: str
    product_id: int
