from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.api.health import router as health_router
from app.api.routes_admin import router as admin_router
from app.api.routes_auth import router as auth_router
from app.api.routes_cart import router as cart_router
from app.api.routes_catalogue import router as catalogue_router
from app.api.routes_categories import router as categories_router
from app.api.routes_checkout import router as checkout_router
from app.api.routes_order import router as order_router
from app.api.routes_wishlist import router as wishlist_router
from app.config import settings
from app.db import SessionLocal, init_db
from app.errors import ConflictError, StorefrontError, field_errors
from app.services.payment_service import PaymentService
from app.utils.logging import get_logger

log = get_logger("api")


def expire_payment_intents_job():
    db = SessionLocal()
    try:
        PaymentService(db).expire_overdue()
    except Exception:
        log.exception("payment intent sweep failed")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db()

    scheduler = None
    if settings.ENABLE_SCHEDULER:
        # scheduler for expiring unused payment intents
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            expire_payment_intents_job,
            "interval",
            seconds=settings.PAYMENT_INTENT_SWEEP_SECONDS,
            id="expire_payment_intents",
        )
        scheduler.start()

    try:
        yield
    finally:
        if scheduler:
            scheduler.shutdown(wait=False)


app = FastAPI(title="Saree Storefront - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "errors": exc.errors},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": field_errors(exc.errors())},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    log.warning("%s %s conflict: %s", request.method, request.url.path, exc.orig)
    err = ConflictError("Resource already exists or violates a constraint")
    return JSONResponse(status_code=err.status_code, content={"message": err.message, "errors": err.errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.error("%s %s crashed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error", "errors": []})


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(auth_router)

app.include_router(categories_router)

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(cart_router)

app.include_router(wishlist_router)

app.include_router(checkout_router)

app.include_router(order_router, prefix="/api/orders", tags=["orders"])

app.include_router(admin_router)
