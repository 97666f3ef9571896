"""Shared document store connection"""

import logging
from typing import Optional

from ..core.config import get_settings
from .store import DocumentStore, MemoryDocumentStore, MongoDocumentStore

logger = logging.getLogger(__name__)

_store: Optional[DocumentStore] = None


def get_store() -> DocumentStore:
    """Get or create the shared document store"""
    global _store
    if _store is None:
        settings = get_settings()
        if settings.uses_mongo:
            _store = MongoDocumentStore(settings.database_url, settings.database_name)
        else:
            logger.warning("DATABASE_URL not set - using in-memory document store")
            _store = MemoryDocumentStore()
    return _store


def close_store() -> None:
    """Close and forget the shared document store"""
    global _store
    if _store is not None:
        _store.close()
        _store = None
