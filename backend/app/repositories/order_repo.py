from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from app.models.order import Order, OrderItem


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_items(self):
        return self.db.query(Order).options(
            selectinload(Order.items).joinedload(OrderItem.product, innerjoin=True)
        )

    def list_for_user(self, user_id: str) -> List[Order]:
        return (
            self._with_items()
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id)
            .all()
        )

    def get_for_user(self, user_id: str, order_id: str) -> Optional[Order]:
        return (
            self._with_items()
            .filter(Order.id == order_id, Order.user_id == user_id)
            .first()
        )

    def get(self, order_id: str) -> Optional[Order]:
        return self._with_items().filter(Order.id == order_id).first()

    def add_order(self, **fields) -> Order:
        order = Order(**fields)
        self.db.add(order)
        self.db.flush()
        return order

    def add_item(
        self,
        order: Order,
        product_id: str,
        quantity: int,
        price: Decimal,
        total: Decimal,
    ) -> OrderItem:
        item = OrderItem(
            order_id=order.id,
            product_id=product_id,
            quantity=quantity,
            price=price,
            total=total,
        )
        self.db.add(item)
        self.db.flush()
        return item
