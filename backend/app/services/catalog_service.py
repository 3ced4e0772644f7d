from typing import Dict, List, Mapping, Optional, Union

import pydantic
from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError, field_errors
from app.models.category import Category
from app.models.product import Product, ProductImage
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_filters import ProductQueryBuilder
from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import ProductFilters
from app.utils.logging import get_logger

log = get_logger("catalog")

CURATED_DEFAULT_LIMIT = 8
MAX_LIMIT = 100


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.product_repo = ProductRepository(db)
        self.category_repo = CategoryRepository(db)

    # ---- categories ----

    def get_categories(self) -> List[Category]:
        return self.category_repo.list_active()

    def get_category_by_slug(self, slug: str) -> Category:
        c = self.category_repo.get_by_slug(slug)
        if not c:
            raise NotFoundError("Category not found")
        return c

    def create_category(self, name: str, slug: str, **fields) -> Category:
        c = self.category_repo.create(name=name, slug=slug, **fields)
        self.db.commit()
        return c

    # ---- products ----

    @staticmethod
    def coerce_filters(
        filters: Union[ProductFilters, Mapping, None]
    ) -> ProductFilters:
        if filters is None:
            return ProductFilters()
        if isinstance(filters, ProductFilters):
            return filters
        try:
            return ProductFilters.model_validate(dict(filters))
        except pydantic.ValidationError as e:
            raise ValidationError("Invalid product filters", field_errors(e.errors()))

    def get_products(self, filters: Union[ProductFilters, Mapping, None] = None) -> Dict:
        """
        Filtered, sorted, paginated catalog search.
        Returns {"products": [...hydrated Product...], "total": <count ignoring pagination>}.
        """
        f = self.coerce_filters(filters)
        builder = (
            ProductQueryBuilder()
            .equals(Product.category_id, f.category_id)
            .search(f.search, Product.name, Product.description)
            .between(Product.price, f.min_price, f.max_price)
            .equals(Product.fabric, f.fabric)
            .equals(Product.occasion, f.occasion)
            .equals(Product.color, f.color)
            .equals(Product.is_new, f.is_new)
            .equals(Product.is_featured, f.is_featured)
            .equals(Product.is_sale, f.is_sale)
        )
        products, total = self.product_repo.search(
            builder.compile(), sort_by=f.sort_by, limit=f.limit, offset=f.offset
        )
        log.debug(
            "get_products predicates=%d total=%d page=%d",
            len(builder.predicates),
            total,
            len(products),
        )
        return {"products": products, "total": total}

    def _curated(self, flag, limit: int) -> List[Product]:
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(
                "Invalid limit",
                [{"field": "limit", "message": f"must be an integer between 1 and {MAX_LIMIT}"}],
            )
        return self.product_repo.list_flagged(flag, limit=limit)

    def get_featured_products(self, limit: int = CURATED_DEFAULT_LIMIT) -> List[Product]:
        return self._curated(Product.is_featured, limit)

    def get_new_products(self, limit: int = CURATED_DEFAULT_LIMIT) -> List[Product]:
        return self._curated(Product.is_new, limit)

    def get_sale_products(self, limit: int = CURATED_DEFAULT_LIMIT) -> List[Product]:
        return self._curated(Product.is_sale, limit)

    def get_product_by_slug(self, slug: str) -> Product:
        p = self.product_repo.get_by_slug(slug, with_reviews=True)
        if not p:
            raise NotFoundError("Product not found")
        return p

    def get_product_by_id(self, product_id: str) -> Product:
        p = self.product_repo.get_by_id(product_id, with_reviews=True)
        if not p:
            raise NotFoundError("Product not found")
        return p

    def create_product(self, images: Optional[List[Dict]] = None, **fields) -> Product:
        """Catalog admin/seed helper. images: [{"image_url", "alt_text", "is_primary", "sort_order"}]."""
        p = self.product_repo.create(**fields)
        for img in images or []:
            self.product_repo.add_image(p, **img)
        self.db.commit()
        return p

    def create_product_image(self, product_id: str, image_url: str, **fields) -> ProductImage:
        # images may be attached before a product is published
        p = self.product_repo.get_by_id(product_id, active_only=False)
        if not p:
            raise NotFoundError("Product not found")
        img = self.product_repo.add_image(p, image_url, **fields)
        self.db.commit()
        return img
