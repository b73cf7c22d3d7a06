"""
Bookworm Backend - Shelf Repository
====================================

What:  One shelf entry per (userId, bookInfo) pair, written by upsert.
How:   The pair is the filter; `shelf` and a fresh `updatedAt` are $set on
       every write. A missing entry is created, an existing one keeps its _id.
       Absent fields are written as null rather than rejected.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from bookworm.database import SHELVES, Document
from bookworm.repositories.base import CollectionRepository


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShelfRepository(CollectionRepository):
    collection_name = SHELVES

    async def upsert(self, payload: Dict[str, Any]) -> Document:
        return await self.collection.update_one(
            {"userId": payload.get("userId"), "bookInfo": payload.get("bookInfo")},
            {
                "$set": {
                    "shelf": payload.get("shelf"),
                    "updatedAt": utcnow(),
                }
            },
            upsert=True,
        )
