from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.models.cart_item import MAX_LINE_QUANTITY
from app.schemas.base import CamelModel
from app.schemas.product_schema import ProductWithImagesOut


class AddToCartIn(CamelModel):
    product_id: str
    quantity: int = Field(1, ge=1, le=MAX_LINE_QUANTITY)


class UpdateCartItemIn(CamelModel):
    quantity: int = Field(..., ge=1, le=MAX_LINE_QUANTITY)


class CartItemOut(CamelModel):
    id: str
    user_id: str
    product_id: str
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CartItemWithProductOut(CartItemOut):
    product: ProductWithImagesOut


class TotalsOut(CamelModel):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


class CartSummaryOut(TotalsOut):
    items: List[CartItemWithProductOut]
    item_count: int


class AddToWishlistIn(CamelModel):
    product_id: str


class WishlistItemOut(CamelModel):
    id: str
    user_id: str
    product_id: str
    created_at: Optional[datetime] = None


class WishlistItemWithProductOut(WishlistItemOut):
    product: ProductWithImagesOut
