import os

os.environ.setdefault("ENV_MODE", "development")
os.environ.setdefault("USE_MEMORY_STORE", "true")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.main import app
from app.services.store import MockDocumentStore, get_document_store


@pytest.fixture()
def store():
    """Fresh in-memory store with one admin (a@x.com) and one customer (b@x.com)."""
    return MockDocumentStore(seed={
        "users": [
            {"_id": str(ObjectId()), "email": "a@x.com", "name": "Admin", "role": "admin"},
            {"_id": str(ObjectId()), "email": "b@x.com", "name": "Guest", "role": "customer"},
        ],
    })


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_document_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def raw_client(store):
    """Client that returns 500 responses instead of re-raising server errors."""
    app.dependency_overrides[get_document_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_client(client):
    response = client.post("/create-token", json={"email": "a@x.com"})
    assert response.status_code == 200
    return client


@pytest.fixture()
def customer_client(client):
    response = client.post("/create-token", json={"email": "b@x.com"})
    assert response.status_code == 200
    return client
