"""
Mock Document Store Implementation

Keeps collections in process memory. Used by the test suite and for local
runs without a database (USE_MEMORY_STORE=true).

Behavior:
    - Generates real ObjectId hex strings for new documents
    - Rejects malformed identifiers with bson.errors.InvalidId, like the driver
    - Preserves insertion order, which find() returns as natural order
    - Returns copies so callers cannot mutate stored documents

Author: Bistro Boss Team
Version: 1.0.0
"""

import copy
import logging
from typing import Any, Optional

from bson import ObjectId

from app.database import to_object_id
from app.services.store.base import (
    BaseDocumentStore,
    DeleteResult,
    InsertResult,
    UpdateResult,
)

logger = logging.getLogger(__name__)


class MockDocumentStore(BaseDocumentStore):
    """
    In-memory implementation of the document store.

    Attributes:
        collections: Collection name -> documents in insertion order

    Example:
        >>> store = MockDocumentStore()
        >>> await store.insert_one("users", {"email": "a@x.com", "role": "admin"})
        >>> await store.find_one("users", {"email": "a@x.com"})
    """

    def __init__(self, seed: Optional[dict[str, list[dict]]] = None):
        """
        Initialize the mock store.

        Args:
            seed: Optional initial documents per collection; documents
                without an ``_id`` get one generated
        """
        self.collections: dict[str, list[dict]] = {}
        for name, documents in (seed or {}).items():
            for document in documents:
                self._insert(name, document)

        logger.info("MockDocumentStore initialized")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    def _insert(self, collection: str, document: dict[str, Any]) -> str:
        doc = copy.deepcopy(document)
        doc_id = str(to_object_id(doc["_id"])) if "_id" in doc else str(ObjectId())
        doc["_id"] = doc_id
        self.collections.setdefault(collection, []).append(doc)
        return doc_id

    def _matches(self, doc: dict, query: Optional[dict[str, Any]]) -> bool:
        if not query:
            return True
        for key, value in query.items():
            if key == "_id":
                value = str(to_object_id(value))
            if doc.get(key) != value:
                return False
        return True

    def _locate(self, collection: str, doc_id: str) -> Optional[dict]:
        target = str(to_object_id(doc_id))
        for doc in self.collections.get(collection, []):
            if doc["_id"] == target:
                return doc
        return None

    async def find(
        self,
        collection: str,
        query: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        docs = [
            copy.deepcopy(doc)
            for doc in self.collections.get(collection, [])
            if self._matches(doc, query)
        ]
        return docs[:limit] if limit else docs

    async def find_one(
        self,
        collection: str,
        query: dict[str, Any],
    ) -> Optional[dict]:
        docs = await self.find(collection, query, limit=1)
        return docs[0] if docs else None

    async def find_by_id(self, collection: str, doc_id: str) -> Optional[dict]:
        doc = self._locate(collection, doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def insert_one(self, collection: str, document: dict[str, Any]) -> InsertResult:
        doc = {k: v for k, v in document.items() if k != "_id"}
        return InsertResult(acknowledged=True, inserted_id=self._insert(collection, doc))

    async def update_by_id(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        doc = self._locate(collection, doc_id)
        if doc is None:
            if not upsert:
                return UpdateResult(acknowledged=True)
            new_id = self._insert(collection, {**fields, "_id": doc_id})
            return UpdateResult(acknowledged=True, upserted_id=new_id)

        changed = any(doc.get(k) != v for k, v in fields.items())
        doc.update(copy.deepcopy(fields))
        return UpdateResult(
            acknowledged=True,
            matched_count=1,
            modified_count=1 if changed else 0,
        )

    async def delete_by_id(self, collection: str, doc_id: str) -> DeleteResult:
        doc = self._locate(collection, doc_id)
        if doc is None:
            return DeleteResult(acknowledged=True, deleted_count=0)
        self.collections[collection].remove(doc)
        return DeleteResult(acknowledged=True, deleted_count=1)

    async def health_check(self) -> bool:
        return True
