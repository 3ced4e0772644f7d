from typing import Optional

from sqlalchemy.orm import Session

from app.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def upsert(
        self,
        user_id: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """Create the user on first sight; refresh profile fields the provider sent."""
        u = self.get(user_id)
        if not u:
            u = User(id=user_id)
            self.db.add(u)
        if email is not None:
            u.email = email
        if first_name is not None:
            u.first_name = first_name
        if last_name is not None:
            u.last_name = last_name
        self.db.flush()
        return u
