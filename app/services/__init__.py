"""
                        Services Module

Business logic shared by the route handlers.

Services:
    - store: Document store (MongoDB or in-memory) behind one interface
    - cart: Cart-to-menu enrichment
"""

from app.services.store import get_document_store, BaseDocumentStore
from app.services.cart import enrich_cart

__all__ = ["get_document_store", "BaseDocumentStore", "enrich_cart"]
