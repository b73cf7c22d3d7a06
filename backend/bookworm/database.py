"""
Bookworm Backend - Document Store Client
=========================================

What:  The single long-lived MongoDB connection and the collection handles the
       repositories work against.
How:   `DocumentStore` / `DocumentCollection` define the small surface the
       application needs (insert, find, find-one, update, delete).
       `MongoDocumentStore` implements it on pymongo's `AsyncMongoClient`.
       The store is built once by the app lifespan, kept on `app.state.store`
       and handed to routes through the `get_store` dependency.
Who:   Repositories (via collections), the health route, the app lifespan.

Result shapes returned to clients:
    insert  → {"acknowledged": true, "insertedId": id}
    update  → {"acknowledged": true, "matchedCount": n, "modifiedCount": n,
               "upsertedCount": n, "upsertedId": id | null}
    delete  → {"acknowledged": true, "deletedCount": n}

Connection pooling is left to the driver. There is no retry at this layer:
an unreachable server at startup raises DatabaseError and aborts the process.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from bookworm.config import settings
from bookworm.exceptions import DatabaseError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Filter = Mapping[str, Any]
SortSpec = Sequence[Tuple[str, int]]

# ── Collection Names ──────────────────────────────────────────────────────
USERS = "users"
BOOKS = "books"
GENRES = "genres"
TUTORIALS = "tutorials"
SHELVES = "shelves"
REVIEWS = "reviews"

ASCENDING = 1
DESCENDING = -1


# ── Result Shapes ─────────────────────────────────────────────────────────
def insert_result(inserted_id: Any, acknowledged: bool = True) -> Document:
    return {"acknowledged": acknowledged, "insertedId": inserted_id}


def update_result(
    matched: int,
    modified: int,
    upserted_id: Any = None,
    acknowledged: bool = True,
) -> Document:
    return {
        "acknowledged": acknowledged,
        "matchedCount": matched,
        "modifiedCount": modified,
        "upsertedCount": 0 if upserted_id is None else 1,
        "upsertedId": upserted_id,
    }


def delete_result(deleted: int, acknowledged: bool = True) -> Document:
    return {"acknowledged": acknowledged, "deletedCount": deleted}


# ── Abstract Interface ────────────────────────────────────────────────────
class DocumentCollection(ABC):
    """
    Handle to one named collection.

    Filters are structural: exact match on fields, `{"$regex": ..., "$options": "i"}`
    for case-insensitive substring matches, and `{"$or": [...]}`.
    """

    @abstractmethod
    async def insert_one(self, document: Document) -> Document:
        """Insert a document; returns an insert result with the generated id."""
        ...

    @abstractmethod
    async def find(self, filter: Filter, sort: Optional[SortSpec] = None) -> List[Document]:
        """Return every matching document, optionally sorted."""
        ...

    @abstractmethod
    async def find_one(self, filter: Filter) -> Optional[Document]:
        """Return the first matching document, or None."""
        ...

    @abstractmethod
    async def update_one(
        self, filter: Filter, update: Mapping[str, Any], upsert: bool = False
    ) -> Document:
        """Apply an update document (e.g. `{"$set": {...}}`) to the first match."""
        ...

    @abstractmethod
    async def delete_one(self, filter: Filter) -> Document:
        """Delete the first match; a miss is a zero count, not an error."""
        ...


class DocumentStore(ABC):
    """
    Process-wide connection to the document database.

    Lifecycle: connect() once at startup, close() once at shutdown.
    Collections that were never written behave as empty.
    """

    @abstractmethod
    async def connect(self) -> None:
        ...

    @abstractmethod
    async def close(self) -> None:
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """True when the server answers a ping."""
        ...

    @abstractmethod
    def collection(self, name: str) -> DocumentCollection:
        ...


# ── MongoDB Implementation ────────────────────────────────────────────────
class MongoCollection(DocumentCollection):
    """DocumentCollection over a pymongo AsyncCollection."""

    def __init__(self, collection):
        self._collection = collection

    async def insert_one(self, document: Document) -> Document:
        result = await self._collection.insert_one(document)
        return insert_result(result.inserted_id, result.acknowledged)

    async def find(self, filter: Filter, sort: Optional[SortSpec] = None) -> List[Document]:
        cursor = self._collection.find(filter)
        if sort:
            cursor = cursor.sort(list(sort))
        return await cursor.to_list(None)

    async def find_one(self, filter: Filter) -> Optional[Document]:
        return await self._collection.find_one(filter)

    async def update_one(
        self, filter: Filter, update: Mapping[str, Any], upsert: bool = False
    ) -> Document:
        result = await self._collection.update_one(filter, update, upsert=upsert)
        return update_result(
            result.matched_count,
            result.modified_count,
            result.upserted_id,
            result.acknowledged,
        )

    async def delete_one(self, filter: Filter) -> Document:
        result = await self._collection.delete_one(filter)
        return delete_result(result.deleted_count, result.acknowledged)


class MongoDocumentStore(DocumentStore):
    """
    DocumentStore backed by a single pymongo AsyncMongoClient.

    The client is created lazily by connect(); constructing the store does no I/O.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        db_name: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        self._uri = uri or settings.db_uri
        self._db_name = db_name or settings.db_name
        self._timeout_ms = timeout_ms or settings.db_timeout_ms
        self._client: Optional[AsyncMongoClient] = None

    @property
    def client(self) -> AsyncMongoClient:
        if self._client is None:
            raise DatabaseError("Document store is not connected")
        return self._client

    async def connect(self) -> None:
        self._client = AsyncMongoClient(
            self._uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=self._timeout_ms,
        )
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            await self._client.close()
            self._client = None
            raise DatabaseError(context={"original_error": str(e)}) from e
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
        except (PyMongoError, DatabaseError) as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False
        return True

    def collection(self, name: str) -> DocumentCollection:
        return MongoCollection(self.client[self._db_name][name])


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_store(request: Request) -> DocumentStore:
    """Returns the store the app lifespan (or a test) placed on app.state."""
    return request.app.state.store
