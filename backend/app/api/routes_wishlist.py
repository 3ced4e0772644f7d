from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db import get_db
from app.models.user import User
from app.schemas.cart_schema import (
    AddToWishlistIn,
    WishlistItemOut,
    WishlistItemWithProductOut,
)
from app.services.wishlist_service import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.get("", summary="Get wishlist", response_model=List[WishlistItemWithProductOut])
def get_wishlist(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return WishlistService(db).get_wishlist_items(user.id)


@router.post("", summary="Add to wishlist", response_model=WishlistItemOut, status_code=201)
def add_item(
    payload: AddToWishlistIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return WishlistService(db).add_to_wishlist(user.id, payload.product_id)


@router.delete("/{product_id}", summary="Remove from wishlist")
def remove_item(
    product_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    WishlistService(db).remove_from_wishlist(user.id, product_id)
    return {"message": "Item removed from wishlist"}
