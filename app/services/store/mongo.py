"""
MongoDB Document Store

Production implementation backed by the PyMongo async client. Each method
maps to exactly one driver call; results are converted to the plain
InsertResult / UpdateResult / DeleteResult records.

Author: Bistro Boss Team
Version: 1.0.0
"""

import logging
from typing import Any, Optional

from pymongo import AsyncMongoClient

from app.core.config import Settings, get_settings
from app.database import create_client, serialize_document, to_object_id
from app.services.store.base import (
    BaseDocumentStore,
    DeleteResult,
    InsertResult,
    UpdateResult,
)

logger = logging.getLogger(__name__)


class MongoDocumentStore(BaseDocumentStore):
    """
    Document store backed by a MongoDB deployment.

    Attributes:
        client: Shared async client
        database_name: Database holding all collections
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[AsyncMongoClient] = None,
    ):
        settings = settings or get_settings()
        self.client = client or create_client(settings)
        self.database_name = settings.database_name
        self._db = self.client[self.database_name]

        logger.info(f"MongoDocumentStore initialized (database={self.database_name})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mongodb"

    def _query(self, query: Optional[dict[str, Any]]) -> dict[str, Any]:
        query = dict(query or {})
        if "_id" in query:
            query["_id"] = to_object_id(query["_id"])
        return query

    async def find(
        self,
        collection: str,
        query: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        cursor = self._db[collection].find(self._query(query))
        if limit:
            cursor = cursor.limit(limit)
        return [serialize_document(doc) for doc in await cursor.to_list()]

    async def find_one(
        self,
        collection: str,
        query: dict[str, Any],
    ) -> Optional[dict]:
        doc = await self._db[collection].find_one(self._query(query))
        return serialize_document(doc) if doc is not None else None

    async def find_by_id(self, collection: str, doc_id: str) -> Optional[dict]:
        return await self.find_one(collection, {"_id": doc_id})

    async def insert_one(self, collection: str, document: dict[str, Any]) -> InsertResult:
        # insert_one adds _id to the dict it is given
        result = await self._db[collection].insert_one(dict(document))
        return InsertResult(
            acknowledged=result.acknowledged,
            inserted_id=str(result.inserted_id),
        )

    async def update_by_id(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        result = await self._db[collection].update_one(
            {"_id": to_object_id(doc_id)},
            {"$set": fields},
            upsert=upsert,
        )
        return UpdateResult(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(result.upserted_id) if result.upserted_id is not None else None,
        )

    async def delete_by_id(self, collection: str, doc_id: str) -> DeleteResult:
        result = await self._db[collection].delete_one({"_id": to_object_id(doc_id)})
        return DeleteResult(
            acknowledged=result.acknowledged,
            deleted_count=result.deleted_count,
        )

    async def health_check(self) -> bool:
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB client closed")
