"""
Document store

Minimal read/write contract the storefront needs from its document database,
with a MongoDB implementation and an in-memory one for development and tests.
"""

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from bson import ObjectId
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Server errors plus client-side encoding failures (oversized ints, bad keys)
STORE_ERRORS = (PyMongoError, BSONError, OverflowError)


class PersistenceError(Exception):
    """Raised when the document store cannot complete an operation"""


class DocumentStore(ABC):
    """Collection-oriented document storage"""

    @abstractmethod
    def insert_one(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        """Insert a document and return it with its assigned ``_id``"""

    @abstractmethod
    def find(self, collection: str, query: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        """Return every document matching an equality query"""

    @abstractmethod
    def find_one(self, collection: str, query: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Return the first document matching an equality query"""

    @abstractmethod
    def count(self, collection: str) -> int:
        """Number of documents in a collection"""

    @abstractmethod
    def list_collection_names(self) -> list[str]:
        """Names of collections holding data"""

    def close(self) -> None:
        """Release the underlying connection"""


class MemoryDocumentStore(DocumentStore):
    """In-memory document storage"""

    def __init__(self):
        self.collections: dict[str, list[dict[str, Any]]] = {}

    def insert_one(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        doc = copy.deepcopy(document)
        doc.setdefault("_id", uuid.uuid4().hex)
        self.collections.setdefault(collection, []).append(doc)
        return copy.deepcopy(doc)

    def find(self, collection: str, query: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        query = query or {}
        return [
            copy.deepcopy(doc)
            for doc in self.collections.get(collection, [])
            if all(doc.get(key) == value for key, value in query.items())
        ]

    def find_one(self, collection: str, query: dict[str, Any]) -> Optional[dict[str, Any]]:
        matches = self.find(collection, query)
        return matches[0] if matches else None

    def count(self, collection: str) -> int:
        return len(self.collections.get(collection, []))

    def list_collection_names(self) -> list[str]:
        return [name for name, docs in self.collections.items() if docs]


class MongoDocumentStore(DocumentStore):
    """MongoDB-backed document storage

    The client is created on first use and reused for every later call.
    ``ObjectId`` values are converted to strings on the way out, and string
    ``_id`` queries that look like ObjectIds are converted on the way in.
    """

    def __init__(self, database_url: str, database_name: str):
        self.database_url = database_url
        self.database_name = database_name
        self._client: Optional[MongoClient] = None

    @property
    def db(self):
        if self._client is None:
            logger.info(f"Connecting to MongoDB database '{self.database_name}'")
            self._client = MongoClient(self.database_url)
        return self._client[self.database_name]

    @staticmethod
    def _to_query(query: Optional[dict[str, Any]]) -> dict[str, Any]:
        query = dict(query or {})
        oid = query.get("_id")
        if isinstance(oid, str) and ObjectId.is_valid(oid):
            query["_id"] = ObjectId(oid)
        return query

    @staticmethod
    def _from_document(document: dict[str, Any]) -> dict[str, Any]:
        if "_id" in document:
            document["_id"] = str(document["_id"])
        return document

    def insert_one(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        doc = dict(document)
        try:
            inserted_id = self.db[collection].insert_one(doc).inserted_id
        except STORE_ERRORS as e:
            raise PersistenceError(f"insert into '{collection}' failed: {e}") from e
        doc["_id"] = inserted_id
        return self._from_document(doc)

    def find(self, collection: str, query: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        try:
            return [self._from_document(doc) for doc in self.db[collection].find(self._to_query(query))]
        except STORE_ERRORS as e:
            raise PersistenceError(f"read from '{collection}' failed: {e}") from e

    def find_one(self, collection: str, query: dict[str, Any]) -> Optional[dict[str, Any]]:
        try:
            doc = self.db[collection].find_one(self._to_query(query))
        except STORE_ERRORS as e:
            raise PersistenceError(f"read from '{collection}' failed: {e}") from e
        return self._from_document(doc) if doc else None

    def count(self, collection: str) -> int:
        try:
            return self.db[collection].count_documents({})
        except STORE_ERRORS as e:
            raise PersistenceError(f"count of '{collection}' failed: {e}") from e

    def list_collection_names(self) -> list[str]:
        try:
            return self.db.list_collection_names()
        except STORE_ERRORS as e:
            raise PersistenceError(f"listing collections failed: {e}") from e

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
