from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.db import get_db
from app.errors import ForbiddenError, UnauthorizedError
from app.models.user import User
from app.repositories.user_repo import UserRepository


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Session validation belongs to the identity provider in front of the API;
    it forwards the authenticated user's id (and profile) as headers.
    """
    user_id = (request.headers.get(settings.AUTH_USER_HEADER) or "").strip()
    if not user_id:
        raise UnauthorizedError("Authentication required")
    user = UserRepository(db).upsert(
        user_id,
        email=request.headers.get(settings.AUTH_EMAIL_HEADER),
        first_name=request.headers.get(settings.AUTH_FIRST_NAME_HEADER),
        last_name=request.headers.get(settings.AUTH_LAST_NAME_HEADER),
    )
    db.commit()
    return user


def get_admin_user(user: User = Depends(get_current_user)) -> User:
    if user.id not in settings.ADMIN_USER_IDS:
        raise ForbiddenError("Admin access required")
    return user
