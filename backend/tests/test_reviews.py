from decimal import Decimal

import pytest

from app.errors import NotFoundError, ValidationError
from app.services.catalog_service import CatalogService
from app.services.review_service import ReviewService
from conftest import OTHER_USER, USER


def test_review_updates_product_rating(client, db, user_id, make_product):
    p = make_product(slug="kanjivaram")

    res = client.post(
        f"/api/products/{p.id}/reviews",
        json={"rating": 5, "title": "Gorgeous", "comment": "Colours are rich"},
        headers=USER,
    )
    assert res.status_code == 201
    assert res.json()["rating"] == 5
    assert res.json()["userId"] == "user-1"

    client.post(f"/api/products/{p.id}/reviews", json={"rating": 4}, headers=OTHER_USER)
    client.post(f"/api/products/{p.id}/reviews", json={"rating": 4}, headers=OTHER_USER)

    body = client.get("/api/products/kanjivaram").json()
    assert body["reviewCount"] == 3
    assert body["rating"] == "4.33"
    assert len(body["reviews"]) == 3

    listed = client.get(f"/api/products/{p.id}/reviews").json()
    assert len(listed) == 3


def test_rating_out_of_range(client, db, user_id, make_product):
    p = make_product()
    res = client.post(f"/api/products/{p.id}/reviews", json={"rating": 6}, headers=USER)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "rating"

    with pytest.raises(ValidationError):
        ReviewService(db).create_review("user-1", p.id, 0)

    db.expire_all()
    product = CatalogService(db).get_product_by_id(p.id)
    assert product.review_count == 0
    assert product.rating == Decimal("0")


def test_review_requires_identity_and_product(client, user_id, db):
    assert client.post("/api/products/x/reviews", json={"rating": 3}).status_code == 401
    assert client.post("/api/products/x/reviews", json={"rating": 3}, headers=USER).status_code == 404
    with pytest.raises(NotFoundError):
        ReviewService(db).create_review("user-1", "missing", 3)
