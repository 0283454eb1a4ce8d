"""
Document Store Abstract Base Class

Defines the interface contract for every document store implementation.
Both MockDocumentStore and MongoDocumentStore must implement these methods.

Each route handler issues exactly one of these calls and forwards the
result, so the write results mirror the MongoDB driver acknowledgement
shape that the frontend already reads (``insertedId``, ``deletedCount``...).

Author: Bistro Boss Team
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class InsertResult:
    """
    Result of inserting one document.

    Attributes:
        acknowledged: Whether the write was acknowledged
        inserted_id: Identifier of the new document
    """
    acknowledged: bool
    inserted_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the driver's camelCase JSON shape."""
        return {
            "acknowledged": self.acknowledged,
            "insertedId": self.inserted_id,
        }


@dataclass
class UpdateResult:
    """
    Result of updating (or upserting) one document.

    Attributes:
        acknowledged: Whether the write was acknowledged
        matched_count: Documents matching the filter (0 or 1)
        modified_count: Documents actually changed
        upserted_id: Identifier of the inserted document on upsert
    """
    acknowledged: bool
    matched_count: int = 0
    modified_count: int = 0
    upserted_id: Optional[str] = None

    @property
    def upserted_count(self) -> int:
        return 0 if self.upserted_id is None else 1

    def to_dict(self) -> dict:
        """Convert to the driver's camelCase JSON shape."""
        return {
            "acknowledged": self.acknowledged,
            "matchedCount": self.matched_count,
            "modifiedCount": self.modified_count,
            "upsertedCount": self.upserted_count,
            "upsertedId": self.upserted_id,
        }


@dataclass
class DeleteResult:
    """
    Result of deleting one document.

    Attributes:
        acknowledged: Whether the write was acknowledged
        deleted_count: Documents removed (0 when nothing matched)
    """
    acknowledged: bool
    deleted_count: int = 0

    def to_dict(self) -> dict:
        """Convert to the driver's camelCase JSON shape."""
        return {
            "acknowledged": self.acknowledged,
            "deletedCount": self.deleted_count,
        }


class BaseDocumentStore(ABC):
    """
    Abstract base class for document stores.

    Documents are plain dicts. Identifiers are exposed as 24-hex strings
    under ``_id``; implementations convert them to ObjectIds internally and
    raise ``bson.errors.InvalidId`` for malformed ones, like the driver.

    Example:
        >>> store = get_document_store()
        >>> result = await store.insert_one("menuItems", {"name": "Soup"})
        >>> item = await store.find_by_id("menuItems", result.inserted_id)
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the storage provider.

        Returns:
            str: Provider name (e.g., "mock", "mongodb")
        """
        pass

    @abstractmethod
    async def find(
        self,
        collection: str,
        query: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """
        Return documents matching an equality filter, in natural order.

        Args:
            collection: Collection name
            query: Field/value pairs that must all match (None = everything)
            limit: Maximum number of documents (None = no limit)
        """
        pass

    @abstractmethod
    async def find_one(
        self,
        collection: str,
        query: dict[str, Any],
    ) -> Optional[dict]:
        """Return the first document matching ``query``, or None."""
        pass

    @abstractmethod
    async def find_by_id(self, collection: str, doc_id: str) -> Optional[dict]:
        """Return the document with ``_id == doc_id``, or None."""
        pass

    @abstractmethod
    async def insert_one(self, collection: str, document: dict[str, Any]) -> InsertResult:
        """Insert a document; a new ``_id`` is generated."""
        pass

    @abstractmethod
    async def update_by_id(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        """
        Set ``fields`` on the document with ``_id == doc_id``.

        Args:
            collection: Collection name
            doc_id: Target identifier
            fields: Field values to set (``$set`` semantics)
            upsert: Insert the document under ``doc_id`` when it is missing
        """
        pass

    @abstractmethod
    async def delete_by_id(self, collection: str, doc_id: str) -> DeleteResult:
        """Delete the document with ``_id == doc_id``."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the database.

        Returns:
            bool: True if the database answered a ping
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
