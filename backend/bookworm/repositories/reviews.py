"""
Bookworm Backend - Review Repository
=====================================

What:  Review submission and the reader-facing listing.

Submission stamps status="pending" and createdAt, overriding whatever the
caller sent for those two fields. Nothing here moves a review to "approved";
that happens out of band. The listing only ever returns approved reviews.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from bookworm.database import DESCENDING, REVIEWS, Document
from bookworm.repositories.base import CollectionRepository

PENDING = "pending"
APPROVED = "approved"


class ReviewRepository(CollectionRepository):
    collection_name = REVIEWS

    async def submit(self, payload: Dict[str, Any]) -> Document:
        payload["status"] = PENDING
        payload["createdAt"] = datetime.now(timezone.utc)
        return await self.create(payload)

    async def list_approved(self, book_id: str) -> List[Document]:
        return await self.list(
            {"bookId": book_id, "status": APPROVED},
            sort=[("_id", DESCENDING)],
        )
