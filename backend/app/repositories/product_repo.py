from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from app.models.product import Product, ProductImage
from app.models.review import Review
from app.repositories.product_filters import sort_order


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def _hydrated(self, query: Query, with_reviews: bool = False) -> Query:
        """
        Attach category (joined into the same SELECT) and images (one batched
        IN query for the whole result set), so a page costs the same number of
        statements whatever its size.
        """
        opts = [joinedload(Product.category), selectinload(Product.images)]
        if with_reviews:
            opts.append(selectinload(Product.reviews))
        return query.options(*opts)

    def search(
        self, where, sort_by: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> Tuple[List[Product], int]:
        query = self.db.query(Product).filter(where)
        total = query.with_entities(func.count(Product.id)).scalar() or 0
        items = (
            self._hydrated(query)
            .order_by(*sort_order(sort_by))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def list_flagged(self, flag, limit: int = 8) -> List[Product]:
        """Active products with a boolean flag set, newest first."""
        return (
            self._hydrated(self.db.query(Product))
            .filter(Product.is_active == True, flag == True)
            .order_by(*sort_order("newest"))
            .limit(limit)
            .all()
        )

    def get_by_slug(self, slug: str, with_reviews: bool = True) -> Optional[Product]:
        return (
            self._hydrated(self.db.query(Product), with_reviews=with_reviews)
            .filter(Product.slug == slug, Product.is_active == True)
            .first()
        )

    def get_by_id(
        self, product_id: str, with_reviews: bool = False, active_only: bool = True
    ) -> Optional[Product]:
        qry = self._hydrated(self.db.query(Product), with_reviews=with_reviews).filter(
            Product.id == product_id
        )
        if active_only:
            qry = qry.filter(Product.is_active == True)
        return qry.first()

    def get_many(self, product_ids: Iterable[str]) -> List[Product]:
        ids = list(set(product_ids))
        if not ids:
            return []
        return (
            self.db.query(Product)
            .filter(Product.id.in_(ids), Product.is_active == True)
            .all()
        )

    def create(self, **fields) -> Product:
        p = Product(**fields)
        self.db.add(p)
        self.db.flush()
        return p

    def add_image(
        self,
        product: Product,
        image_url: str,
        alt_text: Optional[str] = None,
        is_primary: bool = False,
        sort_order: int = 0,
    ) -> ProductImage:
        img = ProductImage(
            product_id=product.id,
            image_url=image_url,
            alt_text=alt_text,
            is_primary=is_primary,
            sort_order=sort_order,
        )
        self.db.add(img)
        self.db.flush()
        return img

    def refresh_review_stats(self, product: Product) -> Product:
        """Recompute rating (mean, 2 places) and review_count from the reviews table."""
        avg, count = (
            self.db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.product_id == product.id)
            .one()
        )
        product.review_count = int(count or 0)
        product.rating = Decimal(str(avg or 0)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        self.db.flush()
        return product
