# =========================================================
# USAGE ROUTER
#
# - Manual usage: one item, stock decrease with sufficiency check
# - Sale: menu item recipe expanded into ingredient deductions
# - History: read-only listing with filters
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from stockwatch.core.config import settings
from stockwatch.core.rate_limiter import limiter
from stockwatch.database import get_db
from stockwatch.models.usage import UsageType
from stockwatch.schemas.report import UsageHistoryResponse
from stockwatch.schemas.usage import (
    ManualUsageCreate,
    ManualUsageResponse,
    SaleCreate,
    SaleResponse,
)
from stockwatch.services import reporting, stock_ledger

router = APIRouter(prefix="/usage", tags=["Usage"])


# =========================================================
# RECORD MANUAL USAGE
# =========================================================
@router.post(
    "/manual",
    response_model=ManualUsageResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.LEDGER_RATE_LIMIT)
def record_manual_usage(
    request: Request,
    usage_data: ManualUsageCreate,
    db: Session = Depends(get_db),
):
    result = stock_ledger.record_manual_usage(db, usage_data)
    return ManualUsageResponse.model_validate(result)


# =========================================================
# RECORD SALE
# =========================================================
@router.post(
    "/sale/{menu_item_id}",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.LEDGER_RATE_LIMIT)
def record_sale(
    request: Request,
    menu_item_id: int,
    sale_data: Optional[SaleCreate] = None,
    db: Session = Depends(get_db),
):
    # An empty body means one unit sold now
    summary = stock_ledger.record_sale(db, menu_item_id, sale_data or SaleCreate())
    return SaleResponse.model_validate(summary)


# =========================================================
# USAGE HISTORY
# =========================================================
@router.get("", response_model=list[UsageHistoryResponse])
def list_usage(
    db: Session = Depends(get_db),
    usage_type: Optional[UsageType] = Query(None, alias="type"),
    item_id: Optional[int] = Query(None, gt=0),
    menu_item_id: Optional[int] = Query(None, gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    return reporting.usage_history(
        db,
        usage_type=usage_type,
        item_id=item_id,
        menu_item_id=menu_item_id,
        start_date=start_date,
        end_date=end_date,
    )
