from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_admin_user
from app.db import get_db
from app.models.user import User
from app.schemas.order_schema import OrderWithItemsOut, UpdateOrderStatusIn
from app.services.order_service import OrderService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.patch(
    "/orders/{order_id}/status",
    summary="Move an order along its lifecycle",
    response_model=OrderWithItemsOut,
)
def update_order_status(
    order_id: str,
    payload: UpdateOrderStatusIn,
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    return OrderService(db).update_order_status(order_id, payload.status)
