from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String

from app.db import Base
from app.utils.clock import utcnow


class PaymentIntent(Base):
    __tablename__ = "payment_intents"

    id = Column(String(64), primary_key=True)  # pi_mock_...
    user_id = Column(String(128), ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(8), nullable=False, default="inr")
    status = Column(
        String(32), nullable=False, default="requires_payment_method"
    )  # requires_payment_method, succeeded, expired
    client_secret = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
