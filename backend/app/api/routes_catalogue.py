import math
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db import get_db
from app.models.user import User
from app.schemas.product_schema import (
    MAX_OFFSET,
    ProductFilters,
    ProductListOut,
    ProductWithDetailsOut,
    ProductWithImagesOut,
    ReviewIn,
    ReviewOut,
)
from app.services.catalog_service import CURATED_DEFAULT_LIMIT, MAX_LIMIT, CatalogService
from app.services.review_service import ReviewService

router = APIRouter(tags=["catalogue"])


@router.get("", summary="Search products", response_model=ProductListOut)
def list_products(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    search: Optional[str] = Query(None, description="matches name or description"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    fabric: Optional[str] = None,
    occasion: Optional[str] = None,
    color: Optional[str] = None,
    is_new: Optional[bool] = Query(None, alias="isNew"),
    is_featured: Optional[bool] = Query(None, alias="isFeatured"),
    is_sale: Optional[bool] = Query(None, alias="isSale"),
    sort_by: str = Query("newest", alias="sortBy"),
    limit: int = Query(20, ge=1, le=MAX_LIMIT),
    offset: int = Query(0, ge=0, le=MAX_OFFSET),
    db: Session = Depends(get_db),
):
    filters = ProductFilters(
        category_id=category_id,
        search=search,
        min_price=min_price,
        max_price=max_price,
        fabric=fabric,
        occasion=occasion,
        color=color,
        is_new=is_new,
        is_featured=is_featured,
        is_sale=is_sale,
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )
    result = CatalogService(db).get_products(filters)
    return {
        "products": result["products"],
        "total": result["total"],
        "limit": limit,
        "offset": offset,
        "total_pages": math.ceil(result["total"] / limit),
    }


@router.get("/featured", summary="Featured products", response_model=List[ProductWithImagesOut])
def featured_products(
    limit: int = Query(CURATED_DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    db: Session = Depends(get_db),
):
    return CatalogService(db).get_featured_products(limit)


@router.get("/new", summary="New arrivals", response_model=List[ProductWithImagesOut])
def new_products(
    limit: int = Query(CURATED_DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    db: Session = Depends(get_db),
):
    return CatalogService(db).get_new_products(limit)


@router.get("/sale", summary="Products on sale", response_model=List[ProductWithImagesOut])
def sale_products(
    limit: int = Query(CURATED_DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    db: Session = Depends(get_db),
):
    return CatalogService(db).get_sale_products(limit)


@router.get("/{slug}", summary="Get product by slug", response_model=ProductWithDetailsOut)
def get_product(slug: str, db: Session = Depends(get_db)):
    return CatalogService(db).get_product_by_slug(slug)


@router.get("/{product_id}/reviews", summary="List reviews", response_model=List[ReviewOut])
def list_reviews(product_id: str, db: Session = Depends(get_db)):
    return ReviewService(db).get_product_reviews(product_id)


@router.post(
    "/{product_id}/reviews",
    summary="Create review",
    response_model=ReviewOut,
    status_code=201,
)
def create_review(
    product_id: str,
    payload: ReviewIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ReviewService(db).create_review(
        user.id, product_id, payload.rating, title=payload.title, comment=payload.comment
    )
