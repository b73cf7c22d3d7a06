"""
Bookworm Backend - Generic Collection Repository
=================================================

What:  The four CRUD verbs every entity shares, written once over a
       DocumentCollection and instantiated per entity.
How:   Each method translates a raw payload or identifier into one store call
       and returns the store's result unchanged. Store errors (a malformed
       ObjectId, a dropped connection) propagate to the caller untouched.

Entity repositories subclass CollectionRepository and add their own rules
(duplicate checks, forced fields, composed filters).
"""

from typing import Any, Dict, List, Optional

from bson import ObjectId

from bookworm.database import (
    Document,
    DocumentCollection,
    DocumentStore,
    Filter,
    SortSpec,
)
from bookworm.exceptions import MissingFieldError


def object_id(value: Any) -> ObjectId:
    """Parse a path identifier; raises bson.errors.InvalidId when malformed."""
    if isinstance(value, ObjectId):
        return value
    return ObjectId(value)


def require(payload: Dict[str, Any], *fields: str) -> None:
    """Presence check: every named field must be present and not null."""
    for field in fields:
        if payload.get(field) is None:
            raise MissingFieldError(field)


class CollectionRepository:
    """
    Generic CRUD over one named collection.

    Attributes:
        collection_name: set by subclasses; resolved against the store on init.
    """

    collection_name: str = ""

    def __init__(self, store: DocumentStore):
        self.collection: DocumentCollection = store.collection(self.collection_name)

    async def create(self, payload: Document) -> Document:
        return await self.collection.insert_one(payload)

    async def list(
        self,
        filter: Optional[Filter] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        return await self.collection.find(filter or {}, sort=sort)

    async def get(self, document_id: Any) -> Optional[Document]:
        return await self.collection.find_one({"_id": object_id(document_id)})

    async def update(self, document_id: Any, partial: Document) -> Document:
        """Partial merge: only the supplied fields are overwritten."""
        return await self.collection.update_one(
            {"_id": object_id(document_id)},
            {"$set": partial},
        )

    async def delete(self, document_id: Any) -> Document:
        return await self.collection.delete_one({"_id": object_id(document_id)})
