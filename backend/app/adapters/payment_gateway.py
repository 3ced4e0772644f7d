import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional
from uuid import uuid4

from app.config import settings


class PaymentDeclined(Exception):
    """Raised for a non-retryable payment failure (e.g., insufficient funds)."""
    pass


class PaymentTransientError(Exception):
    """Raised for a temporary gateway error, suggesting a retry is appropriate."""
    pass


@dataclass(frozen=True)
class PaymentResult:
    transaction_id: str
    status: str
    amount: Decimal
    currency: str
    intent_id: Optional[str] = None


class PaymentGateway(ABC):
    """
    What order logic needs from a payment provider. A real gateway client
    implements these methods; nothing else in the app changes.
    """

    @abstractmethod
    def create_intent(self, amount: Decimal, currency: str) -> Dict:
        """Return {"id", "client_secret", "status"} for a new payment intent."""

    @abstractmethod
    def authorize(
        self, amount: Decimal, currency: str, intent_id: Optional[str] = None
    ) -> PaymentResult:
        """Authorize/capture `amount`. Raises PaymentDeclined or PaymentTransientError."""

    @abstractmethod
    def refund(self, transaction_id: str) -> Dict:
        """Reverse a captured payment."""

    def health_check(self) -> bool:
        return True


class MockPaymentGateway(PaymentGateway):
    """
    Simple synchronous mock gateway.

    decline=True makes every authorization fail with PaymentDeclined;
    transient_failures=N makes the first N authorizations raise PaymentTransientError.
    """

    def __init__(self, delay_ms: int = 0, decline: bool = False, transient_failures: int = 0):
        # Convert delay from milliseconds to seconds for time.sleep
        self.delay_seconds = delay_ms / 1000.0
        self.decline = decline
        self.transient_failures = transient_failures
        self.calls = 0
        self.refunds = []

    def create_intent(self, amount: Decimal, currency: str) -> Dict:
        intent_id = f"pi_mock_{int(time.time() * 1000)}_{uuid4().hex[:8]}"
        return {
            "id": intent_id,
            "client_secret": f"{intent_id}_secret_{uuid4().hex[:12]}",
            "status": "requires_payment_method",
        }

    def authorize(
        self, amount: Decimal, currency: str, intent_id: Optional[str] = None
    ) -> PaymentResult:
        self.calls += 1
        # Simulate network latency / gateway processing
        if self.delay_seconds:
            time.sleep(self.delay_seconds)

        if self.calls <= self.transient_failures:
            raise PaymentTransientError("Simulated transient gateway error")
        if self.decline:
            raise PaymentDeclined("Simulated forced decline")

        return PaymentResult(
            transaction_id=f"mock-{uuid4().hex}",
            status="captured",
            amount=amount,
            currency=currency,
            intent_id=intent_id,
        )

    def refund(self, transaction_id: str) -> Dict:
        """Simulates a refund."""
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        self.refunds.append(transaction_id)
        return {
            "refund_id": f"refund-{uuid4().hex}",
            "status": "refunded",
            "transaction_id": transaction_id,
        }


def get_payment_gateway() -> PaymentGateway:
    """FastAPI dependency; override it to plug in another gateway."""
    return MockPaymentGateway(delay_ms=settings.PAYMENT_MOCK_DELAY_MS)
