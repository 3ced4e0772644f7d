from decimal import Decimal

import pytest

from app.errors import NotFoundError, ValidationError
from app.services.checkout_service import CheckoutService


def test_guest_quote_uses_catalog_prices(client, make_product):
    a = make_product(price=Decimal("1000.00"))
    b = make_product(price=Decimal("1500.00"))

    res = client.post(
        "/api/checkout/quote",
        json={"items": [{"productId": a.id, "quantity": 2}, {"productId": b.id, "quantity": 1}]},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["subtotal"] == "3500.00"
    assert body["shipping"] == "0.00"
    assert body["tax"] == "630.00"
    assert body["total"] == "4130.00"
    assert body["items"][0] == {
        "productId": a.id,
        "quantity": 2,
        "unitPrice": "1000.00",
        "lineTotal": "2000.00",
    }


def test_quote_rejects_unknown_or_inactive(client, db, make_product):
    retired = make_product(is_active=False)
    res = client.post("/api/checkout/quote", json={"items": [{"productId": retired.id, "quantity": 1}]})
    assert res.status_code == 404
    with pytest.raises(NotFoundError):
        CheckoutService(db).quote([{"product_id": "missing", "quantity": 1}])


def test_quote_validates_lines(client, make_product):
    p = make_product()
    assert client.post("/api/checkout/quote", json={"items": []}).status_code == 400
    res = client.post("/api/checkout/quote", json={"items": [{"productId": p.id, "quantity": 0}]})
    assert res.status_code == 400


def test_quote_quantity_upper_bound(client, db, make_product):
    p = make_product()
    res = client.post("/api/checkout/quote", json={"items": [{"productId": p.id, "quantity": 10**20}]})
    assert res.status_code == 400
    with pytest.raises(ValidationError):
        CheckoutService(db).quote([{"product_id": p.id, "quantity": 1000}])
