# =========================================================
# REPORTS ROUTER (READ ONLY)
#
# - Low stock: quantity_on_hand <= reorder_point (reorder_point > 0)
# - Expirations: delivery lines expiring within N days
# - Waste: waste records filtered by item and date range
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stockwatch.core.config import settings
from stockwatch.database import get_db
from stockwatch.schemas.report import (
    ExpirationResponse,
    LowStockResponse,
    WasteReportResponse,
)
from stockwatch.services import reporting

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/low-stock", response_model=list[LowStockResponse])
def low_stock_report(db: Session = Depends(get_db)):
    return reporting.low_stock(db)


@router.get("/expirations", response_model=list[ExpirationResponse])
def expiration_report(
    db: Session = Depends(get_db),
    days: int = Query(settings.EXPIRATION_WINDOW_DAYS, ge=0),
    include_past_due: bool = Query(True),
):
    return reporting.expirations(
        db,
        days=days,
        include_past_due=include_past_due,
    )


@router.get("/waste", response_model=list[WasteReportResponse])
def waste_report(
    db: Session = Depends(get_db),
    item_id: Optional[int] = Query(None, gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    return reporting.waste_history(
        db,
        item_id=item_id,
        start_date=start_date,
        end_date=end_date,
    )
