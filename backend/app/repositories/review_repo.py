from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.review import Review


class ReviewRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_product(self, product_id: str) -> List[Review]:
        return (
            self.db.query(Review)
            .filter(Review.product_id == product_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    def create(
        self,
        product_id: str,
        user_id: str,
        rating: int,
        title: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> Review:
        r = Review(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            title=title,
            comment=comment,
        )
        self.db.add(r)
        self.db.flush()
        return r
