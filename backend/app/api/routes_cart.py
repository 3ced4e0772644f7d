from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db import get_db
from app.models.user import User
from app.schemas.cart_schema import (
    AddToCartIn,
    CartItemOut,
    CartItemWithProductOut,
    CartSummaryOut,
    UpdateCartItemIn,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", summary="Get cart", response_model=List[CartItemWithProductOut])
def get_cart(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return CartService(db).get_cart_items(user.id)


@router.get("/summary", summary="Cart with totals", response_model=CartSummaryOut)
def get_cart_summary(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return CartService(db).get_cart_summary(user.id)


@router.post("", summary="Add item to cart", response_model=CartItemOut, status_code=201)
def add_item(
    payload: AddToCartIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).add_to_cart(user.id, payload.product_id, payload.quantity)


@router.put("/{product_id}", summary="Set item quantity")
def update_item(
    product_id: str,
    payload: UpdateCartItemIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    CartService(db).update_cart_item(user.id, product_id, payload.quantity)
    return {"message": "Cart item updated"}


@router.delete("/{product_id}", summary="Remove item")
def remove_item(
    product_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    CartService(db).remove_from_cart(user.id, product_id)
    return {"message": "Item removed from cart"}


@router.delete("", summary="Clear cart")
def clear_cart(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    CartService(db).clear_cart(user.id)
    return {"message": "Cart cleared"}
