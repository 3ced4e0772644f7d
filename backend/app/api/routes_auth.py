from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.user_schema import UserOut

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user", summary="Current user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user
