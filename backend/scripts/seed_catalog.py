#!/usr/bin/env python3
"""
Seed categories and products from a JSON file, or from the small built-in
saree catalogue when no file is given.

JSON shape:
    {"categories": [{"name", "slug", ...}],
     "products": [{"name", "slug", "price", "category": "<category slug>",
                   "images": ["url", ...], ...}]}

Usage:
    python scripts/seed_catalog.py [--file catalogue.json] [--reset]
"""
import argparse
import json
import os
import sys
from decimal import Decimal

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.db import SessionLocal, init_db
from app.models.category import Category
from app.models.product import Product
from app.services.catalog_service import CatalogService
from app.utils.logging import get_logger

log = get_logger("seed")

PRODUCT_FIELDS = {
    "name", "slug", "description", "short_description", "price", "original_price",
    "fabric", "occasion", "color", "size", "stock", "is_active", "is_featured",
    "is_new", "is_sale", "tags", "care_instructions", "size_guide",
}

SAMPLE_CATALOGUE = {
    "categories": [
        {"name": "Silk Sarees", "slug": "silk-sarees"},
        {"name": "Cotton Sarees", "slug": "cotton-sarees"},
        {"name": "Designer Sarees", "slug": "designer-sarees"},
    ],
    "products": [
        {"name": "Kanjivaram Temple Border", "slug": "kanjivaram-temple-border", "price": "12499",
         "original_price": "14999", "category": "silk-sarees", "fabric": "Silk", "occasion": "Wedding",
         "color": "Red", "stock": 5, "is_featured": True, "is_sale": True,
         "images": ["/images/kanjivaram-1.jpg", "/images/kanjivaram-2.jpg"]},
        {"name": "Banarasi Zari Weave", "slug": "banarasi-zari-weave", "price": "8999",
         "category": "silk-sarees", "fabric": "Silk", "occasion": "Festive", "color": "Gold",
         "stock": 8, "is_featured": True, "is_new": True, "images": ["/images/banarasi-1.jpg"]},
        {"name": "Chanderi Everyday", "slug": "chanderi-everyday", "price": "1899",
         "category": "cotton-sarees", "fabric": "Cotton", "occasion": "Casual", "color": "Blue",
         "stock": 20, "is_new": True, "images": ["/images/chanderi-1.jpg"]},
        {"name": "Handloom Tant", "slug": "handloom-tant", "price": "1299", "original_price": "1599",
         "category": "cotton-sarees", "fabric": "Cotton", "occasion": "Casual", "color": "White",
         "stock": 15, "is_sale": True, "images": ["/images/tant-1.jpg"]},
        {"name": "Sequin Georgette Drape", "slug": "sequin-georgette-drape", "price": "5499",
         "category": "designer-sarees", "fabric": "Georgette", "occasion": "Party", "color": "Black",
         "stock": 4, "is_featured": True, "images": ["/images/georgette-1.jpg"]},
    ],
}


def seed(data: dict):
    db = SessionLocal()
    svc = CatalogService(db)
    created = 0
    try:
        categories = {c.slug: c for c in db.query(Category).all()}
        for entry in data.get("categories", []):
            if entry["slug"] in categories:
                continue
            categories[entry["slug"]] = svc.create_category(**entry)

        existing = {slug for (slug,) in db.query(Product.slug).all()}
        for entry in data.get("products", []):
            if entry.get("slug") in existing:
                continue
            fields = {k: v for k, v in entry.items() if k in PRODUCT_FIELDS}
            for money in ("price", "original_price"):
                if fields.get(money) is not None:
                    fields[money] = Decimal(str(fields[money]))
            cat = categories.get(entry.get("category"))
            images = [
                {"image_url": url, "is_primary": i == 0, "sort_order": i}
                for i, url in enumerate(entry.get("images", []))
            ]
            svc.create_product(images=images, category_id=cat.id if cat else None, **fields)
            created += 1
        log.info("Seeded products: %d", created)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to catalogue json; built-in sample if omitted")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()

    data = SAMPLE_CATALOGUE
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            sys.exit(1)
        with open(args.file, "r", encoding="utf-8") as f:
            data = json.load(f)

    init_db(reset=args.reset)
    seed(data)
