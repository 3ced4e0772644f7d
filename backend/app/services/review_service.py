from typing import List, Optional

from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError
from app.models.review import Review
from app.repositories.product_repo import ProductRepository
from app.repositories.review_repo import ReviewRepository
from app.utils.logging import get_logger
from app.utils.transactions import transaction

log = get_logger("reviews")


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.review_repo = ReviewRepository(db)
        self.product_repo = ProductRepository(db)

    def get_product_reviews(self, product_id: str) -> List[Review]:
        return self.review_repo.list_for_product(product_id)

    def create_review(
        self,
        user_id: str,
        product_id: str,
        rating: int,
        title: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> Review:
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError(
                "Invalid review data",
                [{"field": "rating", "message": "must be an integer from 1 to 5"}],
            )
        product = self.product_repo.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")

        # review row and the product's rating/review_count move together
        with transaction(self.db):
            review = self.review_repo.create(
                product_id=product.id,
                user_id=user_id,
                rating=rating,
                title=title,
                comment=comment,
            )
            self.product_repo.refresh_review_stats(product)
        log.info("review %s on product %s rating=%d", review.id, product.id, rating)
        return review
