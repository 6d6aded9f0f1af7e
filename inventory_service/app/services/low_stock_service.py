import json
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..crud import low_stock_crud
from ..schemas.alerts_schemas import (
    AlertSettings, AlertSupplierOut, LowStockAlertOut, LowStockAlertResponse)

logger = logging.getLogger(__name__)

# Checked in order; the first non-empty value wins
CONTACT_EMAIL_KEYS = ("contact_email", "email", "email_address", "emailAddress")


def resolve_threshold(reorder_threshold: Optional[int], default_threshold: int) -> int:
    if reorder_threshold is None or reorder_threshold < 0:
        return default_threshold
    return int(reorder_threshold)


def project_days_until_stockout(current_stock: int, units_sold: int, window_days: int) -> Optional[int]:
    avg_daily_sales = units_sold / window_days
    if avg_daily_sales <= 0:
        return None
    return math.ceil(current_stock / avg_daily_sales)


def extract_contact_email(contact_info: Any) -> Optional[str]:
    """
    Pull an email address out of a supplier's free-form contact data.

    ``contact_info`` is normally a dict but may arrive as a JSON string
    depending on the driver. Anything unparseable yields ``None``.
    """
    if isinstance(contact_info, str):
        try:
            contact_info = json.loads(contact_info)
        except ValueError:
            return None

    if not isinstance(contact_info, dict):
        return None

    for key in CONTACT_EMAIL_KEYS:
        value = contact_info.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def build_candidates(
    sales: Dict[int, int],
    inventory_rows: Iterable,
    settings: AlertSettings,
) -> List[LowStockAlertOut]:
    """Alerts for rows that sold recently and sit below their reorder threshold."""
    candidates = []
    for row in inventory_rows:
        # Row whose product did not load
        if row.product_id is None or row.product_name is None:
            continue

        units_sold = sales.get(row.product_id, 0)
        if units_sold <= 0:
            continue

        current_stock = int(row.quantity or 0)
        threshold = resolve_threshold(
            row.reorder_threshold, settings.default_threshold)
        if current_stock >= threshold:
            continue

        candidates.append(LowStockAlertOut(
            product_id=row.product_id,
            product_name=row.product_name,
            sku=row.sku,
            warehouse_id=row.warehouse_id,
            warehouse_name=row.warehouse_name,
            current_stock=current_stock,
            threshold=threshold,
            days_until_stockout=project_days_until_stockout(
                current_stock, units_sold, settings.window_days),
        ))
    return candidates


def resolve_suppliers(supplier_rows: Iterable) -> Dict[int, AlertSupplierOut]:
    """Keep the first supplier seen per product; rows arrive best priority first."""
    suppliers = {}
    for row in supplier_rows:
        if row.product_id in suppliers:
            continue
        suppliers[row.product_id] = AlertSupplierOut(
            id=row.supplier_id,
            name=row.supplier_name,
            contact_email=extract_contact_email(row.contact_info),
        )
    return suppliers


def sort_alerts(alerts: List[LowStockAlertOut]) -> List[LowStockAlertOut]:
    # sorted() is stable so ties keep scan order
    return sorted(
        alerts,
        key=lambda a: (a.days_until_stockout is None,
                       a.days_until_stockout or 0),
    )


def empty_report() -> LowStockAlertResponse:
    return LowStockAlertResponse(alerts=[], total_alerts=0)


class LowStockAlertService:
    """Computes the low-stock report for one company. Read only."""

    def __init__(self, db: Session, settings: AlertSettings):
        self.db = db
        self.settings = settings

    def get_alerts(self, company_id: int, now: Optional[datetime] = None) -> LowStockAlertResponse:
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=self.settings.window_days)

        sales = low_stock_crud.aggregate_recent_sales(
            self.db, company_id, since, self.settings.sale_statuses)
        if not sales:
            logger.debug(
                "Company %s has no sales since %s", company_id, since.isoformat())
            return empty_report()

        rows = low_stock_crud.scan_company_inventory(
            self.db, company_id, product_ids=sales.keys())
        candidates = build_candidates(sales, rows, self.settings)
        if not candidates:
            logger.debug(
                "Company %s: %s inventory rows, none below threshold", company_id, len(rows))
            return empty_report()

        product_ids = list(dict.fromkeys(c.product_id for c in candidates))
        suppliers = resolve_suppliers(
            low_stock_crud.fetch_product_suppliers(self.db, product_ids))
        for candidate in candidates:
            candidate.supplier = suppliers.get(candidate.product_id)

        alerts = sort_alerts(candidates)
        logger.info(
            "Company %s: %s products sold, %s inventory rows scanned, %s low stock alerts",
            company_id, len(sales), len(rows), len(alerts))
        return LowStockAlertResponse(alerts=alerts, total_alerts=len(alerts))
