from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.adapters.payment_gateway import PaymentGateway, get_payment_gateway
from app.api.deps import get_current_user
from app.db import get_db
from app.models.user import User
from app.schemas.order_schema import (
    CreateOrderIn,
    OrderWithItemsOut,
    PaymentIntentIn,
    PaymentIntentOut,
    QuoteIn,
    QuoteOut,
)
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService
from app.services.payment_service import PaymentService

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post("/quote", summary="Price a guest checkout", response_model=QuoteOut)
def quote(payload: QuoteIn, db: Session = Depends(get_db)):
    return CheckoutService(db).quote(it.model_dump() for it in payload.items)


@router.post(
    "/create-payment-intent",
    summary="Issue a mock payment intent for the cart total",
    response_model=PaymentIntentOut,
)
def create_payment_intent(
    payload: PaymentIntentIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    return PaymentService(db, gateway=gateway).create_payment_intent(user.id, payload.currency)


@router.post(
    "/create-order",
    summary="Create order from cart (checkout)",
    response_model=OrderWithItemsOut,
    status_code=201,
)
def create_order(
    payload: CreateOrderIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    return OrderService(db, payment_gateway=gateway).create_order(
        user.id,
        payment_intent_id=payload.payment_intent_id,
        shipping_address=payload.shipping_address,
        billing_address=payload.billing_address,
        notes=payload.notes,
    )
