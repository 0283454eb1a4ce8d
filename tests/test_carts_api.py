"""Integration tests for cart endpoints and cart enrichment."""

import asyncio

import pytest
from bson import ObjectId
from bson.errors import InvalidId

from app.services.cart import enrich_cart
from app.services.store import MockDocumentStore

SALAD_ID = str(ObjectId())
PIZZA_ID = str(ObjectId())


@pytest.fixture()
def store():
    return MockDocumentStore(seed={
        "menuItems": [
            {"_id": SALAD_ID, "name": "Caesar Salad", "category": "salad", "price": 9.5,
             "description": "Romaine, parmesan", "image": "salad.jpg"},
            {"_id": PIZZA_ID, "name": "Margherita", "category": "pizza", "price": 14,
             "description": "Tomato, mozzarella", "image": "pizza.jpg"},
        ],
    })


def _add(client, email, menu_id, **fields):
    """Helper: POST /carts and return the inserted id."""
    response = client.post("/carts", json={"email": email, "menuId": menu_id, **fields})
    assert response.status_code == 200
    return response.json()["insertedId"]


class TestCartEndpoints:
    def test_add_to_cart(self, client, store):
        entry_id = _add(client, "b@x.com", SALAD_ID, name="Caesar Salad", price=9.5)

        stored = store.collections["carts"][0]
        assert stored == {
            "_id": entry_id,
            "email": "b@x.com",
            "menuId": SALAD_ID,
            "name": "Caesar Salad",
            "price": 9.5,
        }

    def test_row_without_copied_fields_shows_menu_values(self, client):
        _add(client, "b@x.com", PIZZA_ID)

        [row] = client.get("/carts", params={"email": "b@x.com"}).json()

        assert row["name"] == "Margherita"
        assert row["price"] == 14
        assert row["image"] == "pizza.jpg"
        assert row["menuId"] == PIZZA_ID

    def test_add_requires_menu_id(self, client):
        response = client.post("/carts", json={"email": "b@x.com"})
        assert response.status_code == 422

    def test_add_rejects_unknown_fields(self, client):
        response = client.post(
            "/carts",
            json={"email": "b@x.com", "menuId": SALAD_ID, "quantity": 3},
        )
        assert response.status_code == 422

    def test_list_cart_merges_menu_items_in_cart_order(self, client):
        first = _add(client, "b@x.com", PIZZA_ID, price=12)
        _add(client, "c@x.com", SALAD_ID)
        second = _add(client, "b@x.com", SALAD_ID)

        response = client.get("/carts", params={"email": "b@x.com"})

        assert response.status_code == 200
        rows = response.json()
        assert [r["_id"] for r in rows] == [first, second]
        assert all(r["email"] == "b@x.com" for r in rows)
        assert rows[0]["category"] == "pizza"
        assert rows[0]["price"] == 12
        assert rows[1]["name"] == "Caesar Salad"
        assert rows[1]["description"] == "Romaine, parmesan"

    def test_list_cart_requires_email(self, client):
        assert client.get("/carts").status_code == 422

    def test_empty_cart(self, client):
        assert client.get("/carts", params={"email": "nobody@x.com"}).json() == []

    def test_delete_cart_entry(self, client):
        entry_id = _add(client, "b@x.com", SALAD_ID)

        response = client.delete(f"/carts/{entry_id}")

        assert response.json() == {"acknowledged": True, "deletedCount": 1}
        assert client.get("/carts", params={"email": "b@x.com"}).json() == []

    def test_delete_missing_cart_entry(self, client):
        response = client.delete(f"/carts/{ObjectId()}")
        assert response.json()["deletedCount"] == 0


class TestEnrichCart:
    def test_cart_fields_override_menu_fields(self, store):
        asyncio.run(store.insert_one("carts", {"email": "b@x.com", "menuId": PIZZA_ID, "price": 11}))

        [row] = asyncio.run(enrich_cart(store, "b@x.com"))

        assert row["price"] == 11
        assert row["name"] == "Margherita"
        assert row["_id"] != PIZZA_ID

    def test_deleted_menu_item_leaves_cart_fields_only(self, store):
        asyncio.run(store.insert_one("carts", {"email": "b@x.com", "menuId": SALAD_ID, "name": "Caesar Salad"}))
        asyncio.run(store.delete_by_id("menuItems", SALAD_ID))

        [row] = asyncio.run(enrich_cart(store, "b@x.com"))

        assert row["name"] == "Caesar Salad"
        assert "category" not in row

    def test_malformed_menu_reference_fails_whole_cart(self, store):
        asyncio.run(store.insert_one("carts", {"email": "b@x.com", "menuId": SALAD_ID}))
        asyncio.run(store.insert_one("carts", {"email": "b@x.com", "menuId": "bogus"}))

        with pytest.raises(InvalidId):
            asyncio.run(enrich_cart(store, "b@x.com"))
