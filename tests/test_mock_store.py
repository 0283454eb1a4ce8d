"""Unit tests for the in-memory document store."""

import asyncio

import pytest
from bson import ObjectId
from bson.errors import InvalidId

from app.services.store import MockDocumentStore


def run(coro):
    return asyncio.run(coro)


@pytest.fixture()
def store():
    return MockDocumentStore()


class TestFind:
    def test_equality_filter_and_limit(self, store):
        for i in range(4):
            run(store.insert_one("carts", {"email": "a@x.com" if i % 2 else "b@x.com", "n": i}))

        assert [d["n"] for d in run(store.find("carts", {"email": "a@x.com"}))] == [1, 3]
        assert [d["n"] for d in run(store.find("carts", limit=3))] == [0, 1, 2]

    def test_unknown_collection_is_empty(self, store):
        assert run(store.find("nothing")) == []
        assert run(store.find_one("nothing", {"email": "a@x.com"})) is None

    def test_returned_documents_are_copies(self, store):
        result = run(store.insert_one("menuItems", {"name": "Soup"}))

        run(store.find_by_id("menuItems", result.inserted_id))["name"] = "Changed"

        assert run(store.find_by_id("menuItems", result.inserted_id))["name"] == "Soup"

    def test_malformed_id_raises_like_the_driver(self, store):
        with pytest.raises(InvalidId):
            run(store.find_by_id("menuItems", "123"))


class TestWrites:
    def test_insert_ignores_client_supplied_id(self, store):
        forced = str(ObjectId())
        result = run(store.insert_one("menuItems", {"_id": forced, "name": "Soup"}))

        assert result.acknowledged
        assert result.inserted_id != forced

    def test_update_without_change_reports_zero_modified(self, store):
        doc_id = run(store.insert_one("users", {"role": "admin"})).inserted_id

        result = run(store.update_by_id("users", doc_id, {"role": "admin"}))

        assert (result.matched_count, result.modified_count) == (1, 0)

    def test_update_missing_without_upsert(self, store):
        result = run(store.update_by_id("users", str(ObjectId()), {"role": "admin"}))

        assert result.to_dict()["matchedCount"] == 0
        assert result.upserted_id is None
        assert run(store.find("users")) == []

    def test_delete_twice(self, store):
        doc_id = run(store.insert_one("carts", {"email": "a@x.com"})).inserted_id

        assert run(store.delete_by_id("carts", doc_id)).deleted_count == 1
        assert run(store.delete_by_id("carts", doc_id)).deleted_count == 0
