from typing import List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.cart_item import CartItem
from app.models.product import Product
from app.repositories.upsert import conflict_insert
from app.utils.clock import utcnow


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, user_id: str, product_id: str) -> Optional[CartItem]:
        return (
            self.db.query(CartItem)
            .populate_existing()
            .filter(CartItem.user_id == user_id, CartItem.product_id == product_id)
            .first()
        )

    def list_with_products(self, user_id: str) -> List[CartItem]:
        return (
            self.db.query(CartItem)
            .options(
                joinedload(CartItem.product, innerjoin=True).options(
                    joinedload(Product.category), selectinload(Product.images)
                )
            )
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.created_at.desc(), CartItem.id)
            .all()
        )

    def add_or_increment(
        self, user_id: str, product_id: str, qty: int, max_quantity: int
    ) -> Optional[CartItem]:
        """
        Single-statement upsert: insert the row, or add qty to the existing
        row's quantity inside the database. Concurrent adds cannot lose an update.
        Returns None, leaving the row untouched, when the sum would pass max_quantity.
        """
        table = CartItem.__table__
        now = utcnow()
        stmt = conflict_insert(self.db, table).values(
            id=str(uuid4()),
            user_id=user_id,
            product_id=product_id,
            quantity=qty,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "product_id"],
            set_={
                "quantity": table.c.quantity + stmt.excluded.quantity,
                "updated_at": stmt.excluded.updated_at,
            },
            where=(table.c.quantity + stmt.excluded.quantity) <= max_quantity,
        )
        result = self.db.execute(stmt)
        if not result.rowcount:
            return None
        return self.get_item(user_id, product_id)

    def set_quantity(self, user_id: str, product_id: str, qty: int) -> Optional[CartItem]:
        updated = (
            self.db.query(CartItem)
            .filter(CartItem.user_id == user_id, CartItem.product_id == product_id)
            .update({"quantity": qty, "updated_at": utcnow()}, synchronize_session=False)
        )
        if not updated:
            return None
        return self.get_item(user_id, product_id)

    def remove_item(self, user_id: str, product_id: str) -> int:
        return (
            self.db.query(CartItem)
            .filter(CartItem.user_id == user_id, CartItem.product_id == product_id)
            .delete(synchronize_session=False)
        )

    def clear(self, user_id: str) -> int:
        return (
            self.db.query(CartItem)
            .filter(CartItem.user_id == user_id)
            .delete(synchronize_session=False)
        )
