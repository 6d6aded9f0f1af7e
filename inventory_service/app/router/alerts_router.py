# app/routers/alerts_router.py
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_inventory_db as get_db
from shared.helpers.json_response_helper import INTERNAL_ERROR_MESSAGE, error_response
from ..schemas.alerts_schemas import AlertSettings, LowStockAlertResponse
from ..services.low_stock_service import LowStockAlertService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/companies", tags=["alerts"])


def get_alert_settings() -> AlertSettings:
    return AlertSettings.from_settings(settings)


# Upper bound of the Integer primary key columns
MAX_COMPANY_ID = 2**31 - 1


def parse_company_id(company_id: str) -> int:
    value = company_id.strip()
    if not (value.isascii() and value.isdigit()):
        error_response("invalid company id", http_status=400)
    company_pk = int(value)
    if company_pk <= 0 or company_pk > MAX_COMPANY_ID:
        error_response("invalid company id", http_status=400)
    return company_pk


# ---------------- Low stock alerts ----------------


@router.get("/{company_id}/alerts/low-stock", response_model=LowStockAlertResponse)
def low_stock_alerts(
    company_id: str,
    db: Session = Depends(get_db),
    alert_settings: AlertSettings = Depends(get_alert_settings)
):
    company_pk = parse_company_id(company_id)
    try:
        return LowStockAlertService(db, alert_settings).get_alerts(company_pk)
    except SQLAlchemyError:
        logger.exception(
            "Low stock alert computation failed for company %s", company_pk)
        error_response(INTERNAL_ERROR_MESSAGE, http_status=500)
