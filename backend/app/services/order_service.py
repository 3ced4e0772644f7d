import time
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from app.adapters.payment_gateway import (
    PaymentDeclined,
    PaymentGateway,
    PaymentResult,
    PaymentTransientError,
    get_payment_gateway,
)
from app.config import settings
from app.errors import InternalError, NotFoundError, PaymentDeclinedError, ValidationError
from app.models.order import ORDER_STATUSES, Order
from app.repositories.cart_repo import CartRepository
from app.repositories.order_repo import OrderRepository
from app.services.payment_service import PaymentService
from app.services.pricing import calculate_totals, line_total, to_money
from app.utils.logging import get_logger
from app.utils.transactions import transaction

log = get_logger("orders")

# status -> statuses it may move to
ORDER_TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"processing", "cancelled"},
    "processing": {"shipped", "cancelled"},
    "shipped": {"delivered"},
    "delivered": set(),
    "cancelled": set(),
}


class OrderService:
    def __init__(
        self,
        db: Session,
        payment_gateway: Optional[PaymentGateway] = None,
        max_payment_retries: int = 2,
    ):
        self.db = db
        self.gateway = payment_gateway or get_payment_gateway()
        self.max_payment_retries = max_payment_retries
        self.order_repo = OrderRepository(db)
        self.cart_repo = CartRepository(db)
        self.payments = PaymentService(db, gateway=self.gateway)

    def _gen_order_number(self) -> str:
        return f"ORD-{int(time.time() * 1000)}-{uuid4().hex[:4].upper()}"

    def _authorize(self, amount: Decimal, currency: str, intent_id: Optional[str]) -> PaymentResult:
        # simple retry for transient errors
        attempt = 0
        while True:
            try:
                return self.gateway.authorize(amount, currency, intent_id=intent_id)
            except PaymentTransientError:
                attempt += 1
                if attempt > self.max_payment_retries:
                    raise
                log.warning("transient payment error, retry %d/%d", attempt, self.max_payment_retries)

    def create_order(
        self,
        user_id: str,
        payment_intent_id: Optional[str] = None,
        shipping_address: Optional[Dict[str, Any]] = None,
        billing_address: Optional[Dict[str, Any]] = None,
        notes: Optional[str] = None,
    ) -> Order:
        """
        Turn the user's cart into an order.

        Totals are recomputed from live catalog prices; whatever the client
        showed is ignored. The order row, its items and the cart clear are
        written in one transaction: either all of them land or none do.
        """
        cart = self.cart_repo.list_with_products(user_id)
        if not cart:
            raise ValidationError("Cart is empty")

        # snapshot prices now; these are what the order items keep forever
        lines = [(it.product_id, it.quantity, to_money(it.product.price)) for it in cart]
        totals = calculate_totals((price, qty) for _, qty, price in lines)

        intent = self.payments.claim_intent(user_id, payment_intent_id, totals.total)
        currency = intent.currency if intent else settings.PAYMENT_CURRENCY

        try:
            payment = self._authorize(totals.total, currency, payment_intent_id)
        except PaymentDeclined as e:
            self.db.rollback()
            log.info("payment declined for user=%s: %s", user_id, e)
            raise PaymentDeclinedError(f"Payment declined: {e}")
        except PaymentTransientError as e:
            self.db.rollback()
            log.error("payment gateway unavailable for user=%s: %s", user_id, e)
            raise InternalError("Payment gateway unavailable, try again later")

        try:
            with transaction(self.db):
                order = self.order_repo.add_order(
                    user_id=user_id,
                    order_number=self._gen_order_number(),
                    status="confirmed",
                    subtotal=totals.subtotal,
                    tax=totals.tax,
                    shipping=totals.shipping,
                    total=totals.total,
                    shipping_address=shipping_address,
                    billing_address=billing_address if billing_address is not None else shipping_address,
                    payment_method="card",
                    payment_status="completed",
                    payment_intent_id=payment_intent_id,
                    notes=notes,
                )
                for product_id, qty, price in lines:
                    self.order_repo.add_item(
                        order,
                        product_id=product_id,
                        quantity=qty,
                        price=price,
                        total=line_total(price, qty),
                    )
                self.cart_repo.clear(user_id)
        except Exception:
            # payment already captured; hand it back before surfacing the failure
            log.exception("order materialization failed for user=%s, refunding %s", user_id, payment.transaction_id)
            try:
                self.gateway.refund(payment.transaction_id)
            except Exception:
                log.exception("refund of %s failed", payment.transaction_id)
            raise

        log.info(
            "order %s created for user=%s items=%d total=%s",
            order.order_number,
            user_id,
            len(lines),
            totals.total,
        )
        return self.order_repo.get(order.id)

    def get_user_orders(self, user_id: str) -> List[Order]:
        return self.order_repo.list_for_user(user_id)

    def get_order_by_id(self, user_id: str, order_id: str) -> Order:
        order = self.order_repo.get_for_user(user_id, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def update_order_status(self, order_id: str, status: str) -> Order:
        if status not in ORDER_STATUSES:
            raise ValidationError(
                "Invalid order status",
                [{"field": "status", "message": f"must be one of {', '.join(ORDER_STATUSES)}"}],
            )
        order = self.order_repo.get(order_id)
        if not order:
            raise NotFoundError("Order not found")
        if status != order.status and status not in ORDER_TRANSITIONS[order.status]:
            raise ValidationError(
                f"Cannot move order from {order.status} to {status}",
                [{"field": "status", "message": "transition not allowed"}],
            )
        with transaction(self.db):
            order.status = status
        log.info("order %s status -> %s", order.order_number, status)
        return self.order_repo.get(order_id)
