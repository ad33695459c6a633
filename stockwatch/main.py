# Main application file

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockwatch import models  # noqa: F401  (registers every table)
from stockwatch.core.config import settings
from stockwatch.core.errors import StockError
from stockwatch.core.rate_limiter import limiter
from stockwatch.database import Base, engine, get_db
from stockwatch.routers import (
    categories,
    deliveries,
    items,
    menu_items,
    reports,
    supplier_items,
    suppliers,
    units,
    usage,
    waste,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("stockwatch")


# STARTUP

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")
    yield


# APP INIT

app = FastAPI(
    title="StockWatch Inventory API",
    description="Stock ledger for restaurant inventory: deliveries, usage, sales and waste",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# CORS

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# ERROR HANDLING

@app.exception_handler(StockError)
async def stock_error_handler(request: Request, exc: StockError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected: "
            f"{exc.code} ({exc.detail})"
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(categories.router)
app.include_router(units.router)
app.include_router(suppliers.router)
app.include_router(supplier_items.router)
app.include_router(items.router)
app.include_router(menu_items.router)
app.include_router(deliveries.router)
app.include_router(usage.router)
app.include_router(waste.router)
app.include_router(reports.router)


# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "StockWatch Inventory API is running"}


@app.get("/health/db")
def database_health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )
    return {"status": "ok"}
