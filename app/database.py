"""
Database Connection Module
Handles the MongoDB connection using the PyMongo async client.
"""

import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.server_api import ServerApi

from app.core.config import Settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncMongoClient:
    """
    Create the async MongoDB client.

    The client connects lazily on first operation and is shared by every
    request for the lifetime of the process.
    """
    return AsyncMongoClient(
        settings.mongodb_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )


def to_object_id(doc_id: str) -> ObjectId:
    """
    Convert a path identifier to an ObjectId.

    Raises:
        bson.errors.InvalidId: If ``doc_id`` is not a 24-hex string
    """
    if isinstance(doc_id, ObjectId):
        return doc_id
    return ObjectId(doc_id)


def serialize_document(doc: dict) -> dict:
    """Replace ObjectId values with their hex strings for JSON output."""
    return {
        key: str(value) if isinstance(value, ObjectId) else value
        for key, value in doc.items()
    }


__all__ = ["create_client", "to_object_id", "serialize_document", "InvalidId"]
