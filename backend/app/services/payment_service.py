from datetime import timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from app.adapters.payment_gateway import PaymentGateway, get_payment_gateway
from app.config import settings
from app.errors import ValidationError
from app.models.payment_intent import PaymentIntent
from app.repositories.cart_repo import CartRepository
from app.repositories.payment_intent_repo import PaymentIntentRepository
from app.services.pricing import calculate_totals
from app.utils.clock import ensure_utc, utcnow
from app.utils.logging import get_logger
from app.utils.transactions import transaction

log = get_logger("payments")


class PaymentService:
    def __init__(self, db: Session, gateway: Optional[PaymentGateway] = None):
        self.db = db
        self.gateway = gateway or get_payment_gateway()
        self.intent_repo = PaymentIntentRepository(db)
        self.cart_repo = CartRepository(db)

    def create_payment_intent(self, user_id: str, currency: Optional[str] = None) -> PaymentIntent:
        """
        Issue a mock payment intent for the user's current cart total.
        The amount always comes from the cart, never from the client.
        """
        currency = (currency or settings.PAYMENT_CURRENCY).lower()
        items = self.cart_repo.list_with_products(user_id)
        if not items:
            raise ValidationError("Cart is empty")
        totals = calculate_totals((it.product.price, it.quantity) for it in items)

        raw = self.gateway.create_intent(totals.total, currency)
        with transaction(self.db):
            pi = self.intent_repo.create(
                intent_id=raw["id"],
                user_id=user_id,
                amount=totals.total,
                currency=currency,
                client_secret=raw["client_secret"],
                expires_at=utcnow() + timedelta(seconds=settings.PAYMENT_INTENT_TTL_SECONDS),
            )
        log.info("intent %s for user=%s amount=%s %s", pi.id, user_id, totals.total, currency)
        return pi

    def claim_intent(
        self, user_id: str, intent_id: Optional[str], amount: Decimal
    ) -> Optional[PaymentIntent]:
        """
        Mark a stored intent as used by an order. The caller owns the commit.
        Ids this service never issued are left for the gateway to judge.
        """
        if not intent_id:
            return None
        pi = self.intent_repo.get(intent_id)
        if pi is None:
            return None
        if pi.user_id != user_id:
            raise ValidationError(
                "Unknown payment intent",
                [{"field": "paymentIntentId", "message": "not issued to this user"}],
            )
        if pi.status != "requires_payment_method":
            raise ValidationError(
                f"Payment intent already {pi.status}",
                [{"field": "paymentIntentId", "message": f"status is {pi.status}"}],
            )
        if ensure_utc(pi.expires_at) <= utcnow():
            raise ValidationError(
                "Payment intent has expired",
                [{"field": "paymentIntentId", "message": "expired"}],
            )
        if pi.amount != amount:
            log.warning(
                "intent %s amount %s differs from order total %s (cart changed)",
                pi.id,
                pi.amount,
                amount,
            )
        pi.status = "succeeded"
        return pi

    def expire_overdue(self) -> List[str]:
        """
        Mark intents past expires_at that were never used as 'expired'.
        Return list of expired intent ids.
        """
        with transaction(self.db):
            ids = []
            for pi in self.intent_repo.list_overdue(utcnow()):
                pi.status = "expired"
                ids.append(pi.id)
        if ids:
            log.info("expired %d payment intents", len(ids))
        return ids
