from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db import get_db
from app.models.user import User
from app.schemas.order_schema import OrderWithItemsOut
from app.services.order_service import OrderService

router = APIRouter(tags=["orders"])


@router.get("", summary="Order history", response_model=List[OrderWithItemsOut])
def list_orders(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return OrderService(db).get_user_orders(user.id)


@router.get("/{order_id}", summary="Order detail", response_model=OrderWithItemsOut)
def get_order(
    order_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return OrderService(db).get_order_by_id(user.id, order_id)
