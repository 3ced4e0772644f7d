import threading
import time
from decimal import Decimal

import pytest

from app.db import SessionLocal
from app.errors import NotFoundError, ValidationError
from app.models.cart_item import MAX_LINE_QUANTITY, CartItem
from app.services.cart_service import CartService
from conftest import USER

pytestmark = pytest.mark.usefixtures("user_id")


def test_cart_requires_identity(client):
    res = client.get("/api/cart")
    assert res.status_code == 401
    assert res.json()["message"] == "Authentication required"


def test_add_same_product_twice_increments_one_row(client, db, make_product):
    p = make_product()
    for _ in range(2):
        res = client.post("/api/cart", json={"productId": p.id, "quantity": 2}, headers=USER)
        assert res.status_code == 201

    assert res.json()["quantity"] == 4
    rows = db.query(CartItem).filter(CartItem.user_id == "user-1").all()
    assert len(rows) == 1
    assert rows[0].quantity == 4


def test_add_defaults_to_quantity_one(client, make_product):
    p = make_product()
    res = client.post("/api/cart", json={"productId": p.id}, headers=USER)
    assert res.status_code == 201
    assert res.json()["quantity"] == 1


def test_add_rejects_bad_quantity_and_unknown_product(client, db, make_product):
    p = make_product()
    retired = make_product(is_active=False)

    res = client.post("/api/cart", json={"productId": p.id, "quantity": 0}, headers=USER)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "quantity"

    assert client.post("/api/cart", json={"productId": "missing"}, headers=USER).status_code == 404
    assert client.post("/api/cart", json={"productId": retired.id}, headers=USER).status_code == 404
    assert db.query(CartItem).count() == 0


def test_service_quantity_validation(db, make_product):
    p = make_product()
    svc = CartService(db)
    for bad in (0, -1, 1.5, True):
        with pytest.raises(ValidationError):
            svc.add_to_cart("user-1", p.id, bad)
    with pytest.raises(NotFoundError):
        svc.add_to_cart("user-1", "missing", 1)


def test_update_overwrites_quantity(client, db, make_product):
    p = make_product()
    client.post("/api/cart", json={"productId": p.id, "quantity": 3}, headers=USER)

    res = client.put(f"/api/cart/{p.id}", json={"quantity": 7}, headers=USER)
    assert res.status_code == 200
    assert res.json() == {"message": "Cart item updated"}
    assert CartService(db).get_cart_items("user-1")[0].quantity == 7

    assert client.put(f"/api/cart/{p.id}", json={"quantity": 0}, headers=USER).status_code == 400


def test_update_missing_line_does_not_create_it(db, make_product):
    p = make_product()
    assert CartService(db).update_cart_item("user-1", p.id, 5) is None
    assert db.query(CartItem).count() == 0


def test_remove_and_clear(client, db, make_product):
    a, b = make_product(), make_product()
    client.post("/api/cart", json={"productId": a.id}, headers=USER)
    client.post("/api/cart", json={"productId": b.id}, headers=USER)

    # removing something not in the cart is a no-op
    assert client.delete("/api/cart/not-there", headers=USER).status_code == 200
    assert len(client.get("/api/cart", headers=USER).json()) == 2

    assert client.delete(f"/api/cart/{a.id}", headers=USER).status_code == 200
    assert [it["productId"] for it in client.get("/api/cart", headers=USER).json()] == [b.id]

    assert client.delete("/api/cart", headers=USER).json() == {"message": "Cart cleared"}
    assert client.get("/api/cart", headers=USER).json() == []


def test_cart_is_per_user(client, make_product):
    p = make_product()
    client.post("/api/cart", json={"productId": p.id}, headers=USER)
    assert client.get("/api/cart", headers={"X-User-Id": "user-2"}).json() == []


def test_cart_lines_newest_first_with_live_product(client, db, make_product):
    first = make_product(name="First")
    second = make_product(name="Second", images=[{"image_url": "/img/s.jpg", "is_primary": True}])
    client.post("/api/cart", json={"productId": first.id}, headers=USER)
    time.sleep(0.01)
    client.post("/api/cart", json={"productId": second.id}, headers=USER)

    # catalog price edits show up in the cart immediately
    first.price = Decimal("1750.00")
    db.commit()

    items = client.get("/api/cart", headers=USER).json()
    assert [it["product"]["name"] for it in items] == ["Second", "First"]
    assert items[0]["product"]["images"][0]["imageUrl"] == "/img/s.jpg"
    assert items[1]["product"]["price"] == "1750.00"


def test_cart_summary_totals(client, make_product):
    p = make_product(price=Decimal("1000.00"))
    client.post("/api/cart", json={"productId": p.id, "quantity": 2}, headers=USER)

    body = client.get("/api/cart/summary", headers=USER).json()
    assert body["itemCount"] == 2
    assert body["subtotal"] == "2000.00"
    assert body["shipping"] == "99.00"
    assert body["tax"] == "360.00"
    assert body["total"] == "2459.00"
    assert len(body["items"]) == 1


def test_quantity_has_an_upper_bound(client, db, make_product):
    p = make_product()

    res = client.post("/api/cart", json={"productId": p.id, "quantity": 10**20}, headers=USER)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "quantity"
    res = client.post("/api/cart", json={"productId": p.id, "quantity": MAX_LINE_QUANTITY + 1}, headers=USER)
    assert res.status_code == 400

    client.post("/api/cart", json={"productId": p.id}, headers=USER)
    res = client.put(f"/api/cart/{p.id}", json={"quantity": 2**62}, headers=USER)
    assert res.status_code == 400

    with pytest.raises(ValidationError):
        CartService(db).add_to_cart("user-1", p.id, MAX_LINE_QUANTITY + 1)
    with pytest.raises(ValidationError):
        CartService(db).update_cart_item("user-1", p.id, MAX_LINE_QUANTITY + 1)


def test_increment_past_limit_is_rejected_and_cart_stays_readable(client, db, make_product):
    p = make_product()
    first = client.post("/api/cart", json={"productId": p.id, "quantity": 60}, headers=USER)
    assert first.status_code == 201

    res = client.post("/api/cart", json={"productId": p.id, "quantity": 60}, headers=USER)
    assert res.status_code == 400
    assert res.json()["message"] == "Quantity limit reached"

    # exactly at the limit is fine
    res = client.post("/api/cart", json={"productId": p.id, "quantity": MAX_LINE_QUANTITY - 60}, headers=USER)
    assert res.status_code == 201
    assert res.json()["quantity"] == MAX_LINE_QUANTITY

    summary = client.get("/api/cart/summary", headers=USER)
    assert summary.status_code == 200
    assert summary.json()["itemCount"] == MAX_LINE_QUANTITY
    assert db.query(CartItem).count() == 1


def test_concurrent_adds_lose_no_update(make_product):
    product_id = make_product().id
    workers, adds_each = 8, 5
    errors = []

    def worker():
        s = SessionLocal()
        try:
            svc = CartService(s)
            for _ in range(adds_each):
                svc.add_to_cart("user-1", product_id, 1)
        except Exception as e:
            errors.append(e)
        finally:
            s.close()

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    s = SessionLocal()
    try:
        rows = s.query(CartItem).filter(CartItem.user_id == "user-1", CartItem.product_id == product_id).all()
    finally:
        s.close()
    assert len(rows) == 1
    assert rows[0].quantity == workers * adds_each
