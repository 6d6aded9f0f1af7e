from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from shared.core.config import Settings


# ---------------- Engine configuration ----------------
class AlertSettings(BaseModel):
    window_days: int = Field(default=30, gt=0)
    default_threshold: int = Field(default=20, ge=0)
    sale_statuses: List[str] = Field(
        default_factory=lambda: ["completed", "shipped"])

    @field_validator("sale_statuses")
    @classmethod
    def normalize_statuses(cls, value: List[str]) -> List[str]:
        # Order statuses are compared lowercased
        return [s.strip().lower() for s in value if s.strip()]

    @classmethod
    def from_settings(cls, settings: Settings) -> "AlertSettings":
        return cls(
            window_days=settings.SALES_WINDOW_DAYS,
            default_threshold=settings.DEFAULT_REORDER_THRESHOLD,
            sale_statuses=settings.sale_order_statuses,
        )


# ---------------- Alert Output ----------------
class AlertSupplierOut(BaseModel):
    id: int
    name: str
    contact_email: Optional[str] = None


class LowStockAlertOut(BaseModel):
    product_id: int
    product_name: str
    sku: str
    warehouse_id: int
    warehouse_name: Optional[str] = None
    current_stock: int
    threshold: int
    days_until_stockout: Optional[int] = None
    supplier: Optional[AlertSupplierOut] = None


class LowStockAlertResponse(BaseModel):
    alerts: List[LowStockAlertOut]
    total_alerts: int
