from fastapi import APIRouter, Depends
from sqlalchemy import text

from app.adapters.payment_gateway import PaymentGateway, get_payment_gateway
from app.db import engine
from app.utils.logging import get_logger

log = get_logger("health")

router = APIRouter()


@router.get("/health", tags=["health"])
def health(gateway: PaymentGateway = Depends(get_payment_gateway)):
    db_ok = False
    payment_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        log.exception("database health check failed")
    try:
        payment_ok = gateway.health_check()
    except Exception:
        log.exception("payment gateway health check failed")

    return {
        "status": "ok" if db_ok and payment_ok else "degraded",
        "db": db_ok,
        "payment_gateway": payment_ok,
    }
