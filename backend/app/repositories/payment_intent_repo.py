from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.payment_intent import PaymentIntent


class PaymentIntentRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, intent_id: str) -> Optional[PaymentIntent]:
        return self.db.get(PaymentIntent, intent_id)

    def create(
        self,
        intent_id: str,
        user_id: str,
        amount: Decimal,
        currency: str,
        client_secret: str,
        expires_at: datetime,
    ) -> PaymentIntent:
        pi = PaymentIntent(
            id=intent_id,
            user_id=user_id,
            amount=amount,
            currency=currency,
            status="requires_payment_method",
            client_secret=client_secret,
            expires_at=expires_at,
        )
        self.db.add(pi)
        self.db.flush()
        return pi

    def list_overdue(self, now: datetime) -> List[PaymentIntent]:
        return (
            self.db.query(PaymentIntent)
            .filter(
                PaymentIntent.status == "requires_payment_method",
                PaymentIntent.expires_at <= now,
            )
            .all()
        )
