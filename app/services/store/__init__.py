"""
Document Store Factory

Provides a single entry point for obtaining the document store.
Selects the in-memory MockDocumentStore or MongoDocumentStore based on
the USE_MEMORY_STORE setting.

Usage:
    from app.services.store import get_document_store

    store = get_document_store()
    items = await store.find("menuItems", limit=6)

Route handlers receive the store through ``Depends(get_document_store)``,
so tests swap it with ``app.dependency_overrides``.

Author: Bistro Boss Team
Version: 1.0.0
"""

import logging
from functools import lru_cache

from app.core.config import get_settings
from app.services.store.base import (
    BaseDocumentStore,
    DeleteResult,
    InsertResult,
    UpdateResult,
)
from app.services.store.mock import MockDocumentStore
from app.services.store.mongo import MongoDocumentStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_document_store() -> BaseDocumentStore:
    """
    Get the configured document store instance.

    Returns:
        BaseDocumentStore: Shared store for the whole process
    """
    settings = get_settings()

    if settings.use_memory_store:
        logger.info("Document Store: Using MockDocumentStore (in-memory)")
        return MockDocumentStore()

    logger.info(
        f"Document Store: Using MongoDocumentStore "
        f"({settings.env_mode.value} mode)"
    )
    return MongoDocumentStore(settings)


def reset_document_store() -> None:
    """
    Clear the cached store instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_document_store.cache_clear()
    logger.debug("Document store cache cleared")


__all__ = [
    "get_document_store",
    "reset_document_store",
    "BaseDocumentStore",
    "InsertResult",
    "UpdateResult",
    "DeleteResult",
    "MockDocumentStore",
    "MongoDocumentStore",
]
