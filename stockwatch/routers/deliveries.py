# =========================================================
# DELIVERIES ROUTER
#
# POST records a multi-line delivery through the stock ledger
# (all lines or none). GET endpoints are read-only.
# =========================================================

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session, joinedload

from stockwatch.core.config import settings
from stockwatch.core.errors import NotFound
from stockwatch.core.rate_limiter import limiter
from stockwatch.database import get_db
from stockwatch.models.deliveries import Delivery, DeliveryLine
from stockwatch.schemas.delivery import DeliveryCreate, DeliveryResponse
from stockwatch.services import stock_ledger

router = APIRouter(prefix="/deliveries", tags=["Deliveries"])


# =========================================================
# RECORD DELIVERY
# =========================================================
@router.post("", response_model=DeliveryResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.LEDGER_RATE_LIMIT)
def record_delivery(
    request: Request,
    delivery_data: DeliveryCreate,
    db: Session = Depends(get_db),
):
    return stock_ledger.record_delivery(db, delivery_data)


# =========================================================
# LIST DELIVERIES
# =========================================================
@router.get("", response_model=list[DeliveryResponse])
def list_deliveries(db: Session = Depends(get_db)):
    return (
        db.query(Delivery)
        .options(
            joinedload(Delivery.supplier),
            joinedload(Delivery.lines).joinedload(DeliveryLine.item),
            joinedload(Delivery.lines).joinedload(DeliveryLine.unit),
        )
        .order_by(Delivery.delivery_date.desc(), Delivery.id.desc())
        .all()
    )


# =========================================================
# GET SINGLE DELIVERY
# =========================================================
@router.get("/{delivery_id}", response_model=DeliveryResponse)
def get_delivery(delivery_id: int, db: Session = Depends(get_db)):
    delivery = stock_ledger.get_delivery(db, delivery_id)

    if not delivery:
        raise NotFound("Delivery not found")

    return delivery
