from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.category import Category


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> List[Category]:
        return (
            self.db.query(Category)
            .filter(Category.is_active == True)
            .order_by(Category.name)
            .all()
        )

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return (
            self.db.query(Category)
            .filter(Category.slug == slug, Category.is_active == True)
            .first()
        )

    def create(self, **fields) -> Category:
        c = Category(**fields)
        self.db.add(c)
        self.db.flush()
        return c
