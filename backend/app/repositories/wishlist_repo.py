from typing import List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.product import Product
from app.models.wishlist_item import WishlistItem
from app.repositories.upsert import conflict_insert
from app.utils.clock import utcnow


class WishlistRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, user_id: str, product_id: str) -> Optional[WishlistItem]:
        return (
            self.db.query(WishlistItem)
            .filter(
                WishlistItem.user_id == user_id, WishlistItem.product_id == product_id
            )
            .first()
        )

    def list_with_products(self, user_id: str) -> List[WishlistItem]:
        return (
            self.db.query(WishlistItem)
            .options(
                joinedload(WishlistItem.product, innerjoin=True).options(
                    joinedload(Product.category), selectinload(Product.images)
                )
            )
            .filter(WishlistItem.user_id == user_id)
            .order_by(WishlistItem.created_at.desc(), WishlistItem.id)
            .all()
        )

    def add(self, user_id: str, product_id: str) -> WishlistItem:
        # existing pair is left untouched
        stmt = (
            conflict_insert(self.db, WishlistItem.__table__)
            .values(
                id=str(uuid4()),
                user_id=user_id,
                product_id=product_id,
                created_at=utcnow(),
            )
            .on_conflict_do_nothing(index_elements=["user_id", "product_id"])
        )
        self.db.execute(stmt)
        return self.get_item(user_id, product_id)

    def remove_item(self, user_id: str, product_id: str) -> int:
        return (
            self.db.query(WishlistItem)
            .filter(
                WishlistItem.user_id == user_id, WishlistItem.product_id == product_id
            )
            .delete(synchronize_session=False)
        )
