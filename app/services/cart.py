"""
Cart Enrichment

Joins a user's cart rows with the menu items they reference so the
frontend can render name, image and price from one response.
"""

import asyncio
import logging

from app.core.config import get_settings
from app.services.store.base import BaseDocumentStore

logger = logging.getLogger(__name__)


async def enrich_cart(store: BaseDocumentStore, email: str) -> list[dict]:
    """
    Return the cart rows owned by ``email``, each merged over its menu item.

    Menu lookups run concurrently; output order follows the cart query.
    Cart fields win on conflict, so ``_id`` stays the cart row's id. A row
    whose menu item no longer exists is returned with its own fields only.
    Any failed lookup (e.g. a malformed ``menuId``) fails the whole call.

    Args:
        store: Document store
        email: Cart owner

    Returns:
        list[dict]: Merged display rows
    """
    settings = get_settings()
    entries = await store.find(settings.cart_collection, {"email": email})

    menu_items = await asyncio.gather(*(
        store.find_by_id(settings.menu_collection, entry["menuId"])
        for entry in entries
    ))

    merged = []
    for entry, menu_item in zip(entries, menu_items):
        if menu_item is None:
            logger.debug(f"Cart row {entry['_id']} references missing menu item {entry['menuId']}")
        merged.append({**(menu_item or {}), **entry})
    return merged
