from app.models.wishlist_item import WishlistItem
from conftest import USER


def test_wishlist_add_list_remove(client, db, user_id, make_product):
    p = make_product(name="Banarasi")

    res = client.post("/api/wishlist", json={"productId": p.id}, headers=USER)
    assert res.status_code == 201
    assert res.json()["productId"] == p.id

    items = client.get("/api/wishlist", headers=USER).json()
    assert [it["product"]["name"] for it in items] == ["Banarasi"]

    assert client.delete(f"/api/wishlist/{p.id}", headers=USER).status_code == 200
    assert client.get("/api/wishlist", headers=USER).json() == []


def test_wishlist_add_is_idempotent(client, db, user_id, make_product):
    p = make_product()
    first = client.post("/api/wishlist", json={"productId": p.id}, headers=USER).json()
    second = client.post("/api/wishlist", json={"productId": p.id}, headers=USER).json()
    assert first["id"] == second["id"]
    assert db.query(WishlistItem).count() == 1


def test_wishlist_unknown_product(client, user_id):
    res = client.post("/api/wishlist", json={"productId": "missing"}, headers=USER)
    assert res.status_code == 404


def test_wishlist_requires_identity(client):
    assert client.get("/api/wishlist").status_code == 401
