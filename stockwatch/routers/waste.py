# =========================================================
# WASTE ROUTER
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from stockwatch.core.config import settings
from stockwatch.core.rate_limiter import limiter
from stockwatch.database import get_db
from stockwatch.schemas.report import WasteReportResponse
from stockwatch.schemas.waste import WasteCreate, WasteResponse
from stockwatch.services import reporting, stock_ledger

router = APIRouter(prefix="/waste", tags=["Waste"])


@router.post("", response_model=WasteResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.LEDGER_RATE_LIMIT)
def record_waste(
    request: Request,
    waste_data: WasteCreate,
    db: Session = Depends(get_db),
):
    result = stock_ledger.record_waste(db, waste_data)
    return WasteResponse.model_validate(result)


@router.get("", response_model=list[WasteReportResponse])
def list_waste(
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
