from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError
from app.models.cart_item import MAX_LINE_QUANTITY, CartItem
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.services.pricing import calculate_totals
from app.utils.logging import get_logger

log = get_logger("cart")


def check_quantity(qty) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int) or not 1 <= qty <= MAX_LINE_QUANTITY:
        raise ValidationError(
            "Invalid quantity",
            [{"field": "quantity", "message": f"must be an integer from 1 to {MAX_LINE_QUANTITY}"}],
        )
    return qty


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.product_repo = ProductRepository(db)

    def get_cart_items(self, user_id: str) -> List[CartItem]:
        """Cart lines, most recently added first, each with its live hydrated product."""
        return self.cart_repo.list_with_products(user_id)

    def get_cart_summary(self, user_id: str) -> Dict:
        items = self.get_cart_items(user_id)
        totals = calculate_totals((it.product.price, it.quantity) for it in items)
        return {
            "items": items,
            "item_count": sum(it.quantity for it in items),
            **totals._asdict(),
        }

    def add_to_cart(self, user_id: str, product_id: str, qty: int = 1) -> CartItem:
        check_quantity(qty)
        if not self.product_repo.get_by_id(product_id):
            raise NotFoundError("Product not found")
        item = self.cart_repo.add_or_increment(user_id, product_id, qty, MAX_LINE_QUANTITY)
        if item is None:
            self.db.rollback()
            raise ValidationError(
                "Quantity limit reached",
                [{"field": "quantity", "message": f"a cart line holds at most {MAX_LINE_QUANTITY}"}],
            )
        self.db.commit()
        log.info("user=%s added product=%s qty=%d (now %d)", user_id, product_id, qty, item.quantity)
        return item

    def update_cart_item(self, user_id: str, product_id: str, qty: int) -> Optional[CartItem]:
        """Overwrite the quantity. Zero is not allowed here; use remove_from_cart."""
        check_quantity(qty)
        item = self.cart_repo.set_quantity(user_id, product_id, qty)
        self.db.commit()
        return item

    def remove_from_cart(self, user_id: str, product_id: str) -> None:
        self.cart_repo.remove_item(user_id, product_id)
        self.db.commit()

    def clear_cart(self, user_id: str) -> None:
        self.cart_repo.clear(user_id)
        self.db.commit()
