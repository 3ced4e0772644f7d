# backend/app/schemas/product_schema.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel

MAX_OFFSET = 100_000


class CategoryOut(CamelModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None


class ProductImageOut(CamelModel):
    id: str
    product_id: str
    image_url: str
    alt_text: Optional[str] = None
    is_primary: bool
    sort_order: int


class ProductOut(CamelModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    price: Decimal
    original_price: Optional[Decimal] = None
    category_id: Optional[str] = None
    fabric: Optional[str] = None
    occasion: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    stock: int
    is_active: bool
    is_featured: bool
    is_new: bool
    is_sale: bool
    rating: Decimal
    review_count: int
    tags: Optional[List[str]] = None
    care_instructions: Optional[str] = None
    size_guide: Optional[str] = None
    created_at: Optional[datetime] = None


class ProductWithImagesOut(ProductOut):
    images: List[ProductImageOut] = []
    category: Optional[CategoryOut] = None


class ReviewOut(CamelModel):
    id: str
    product_id: str
    user_id: str
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    is_verified_purchase: bool
    helpful_count: int
    created_at: Optional[datetime] = None


class ReviewIn(CamelModel):
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = Field(None, max_length=255)
    comment: Optional[str] = None


class ProductWithDetailsOut(ProductWithImagesOut):
    reviews: List[ReviewOut] = []


class ProductListOut(CamelModel):
    products: List[ProductWithImagesOut]
    total: int
    limit: int
    offset: int
    total_pages: int


class ProductFilters(CamelModel):
    """Catalog search filters. Unset fields do not filter."""

    category_id: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    fabric: Optional[str] = None
    occasion: Optional[str] = None
    color: Optional[str] = None
    is_new: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_sale: Optional[bool] = None
    sort_by: str = "newest"
    limit: int = Field(20, ge=1, le=100)
    offset: int = Field(0, ge=0, le=MAX_OFFSET)
