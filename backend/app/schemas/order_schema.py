from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.models.cart_item import MAX_LINE_QUANTITY
from app.schemas.base import CamelModel
from app.schemas.cart_schema import TotalsOut
from app.schemas.product_schema import ProductOut


class CreateOrderIn(CamelModel):
    payment_intent_id: Optional[str] = None
    shipping_address: Dict[str, Any]
    billing_address: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None


class OrderItemOut(CamelModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    price: Decimal
    total: Decimal
    created_at: Optional[datetime] = None


class OrderItemWithProductOut(OrderItemOut):
    product: ProductOut


class OrderOut(CamelModel):
    id: str
    user_id: str
    order_number: str
    status: str
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    shipping_address: Optional[Dict[str, Any]] = None
    billing_address: Optional[Dict[str, Any]] = None
    payment_method: Optional[str] = None
    payment_status: str
    payment_intent_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderWithItemsOut(OrderOut):
    items: List[OrderItemWithProductOut] = []


class UpdateOrderStatusIn(CamelModel):
    status: str


class PaymentIntentIn(CamelModel):
    currency: Optional[str] = None


class PaymentIntentOut(CamelModel):
    id: str
    amount: Decimal
    currency: str
    status: str
    client_secret: str
    expires_at: datetime


class QuoteLineIn(CamelModel):
    product_id: str
    quantity: int = Field(..., ge=1, le=MAX_LINE_QUANTITY)


class QuoteIn(CamelModel):
    items: List[QuoteLineIn] = Field(..., min_length=1)


class QuoteLineOut(CamelModel):
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class QuoteOut(TotalsOut):
    items: List[QuoteLineOut]
