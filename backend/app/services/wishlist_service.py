from typing import List

from sqlalchemy.orm import Session

from app.errors import NotFoundError
from app.models.wishlist_item import WishlistItem
from app.repositories.product_repo import ProductRepository
from app.repositories.wishlist_repo import WishlistRepository


class WishlistService:
    def __init__(self, db: Session):
        self.db = db
        self.wishlist_repo = WishlistRepository(db)
        self.product_repo = ProductRepository(db)

    def get_wishlist_items(self, user_id: str) -> List[WishlistItem]:
        return self.wishlist_repo.list_with_products(user_id)

    def add_to_wishlist(self, user_id: str, product_id: str) -> WishlistItem:
        if not self.product_repo.get_by_id(product_id):
            raise NotFoundError("Product not found")
        item = self.wishlist_repo.add(user_id, product_id)
        self.db.commit()
        return item

    def remove_from_wishlist(self, user_id: str, product_id: str) -> None:
        self.wishlist_repo.remove_item(user_id, product_id)
        self.db.commit()
