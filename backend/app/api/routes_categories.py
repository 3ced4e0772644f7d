from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.schemas.product_schema import CategoryOut
from app.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["catalogue"])


@router.get("", summary="List active categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).get_categories()


@router.get("/{slug}", summary="Get category", response_model=CategoryOut)
def get_category(slug: str, db: Session = Depends(get_db)):
    return CatalogService(db).get_category_by_slug(slug)
