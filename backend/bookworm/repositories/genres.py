"""
Bookworm Backend - Genre Repository
====================================

What:  Genres, kept unique by case-insensitive name and always listed by name.

Both create and rename check for a case-insensitively equal name before
writing. The check and the write are two separate store calls, so two
concurrent requests for "Fantasy" and "fantasy" can both succeed.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from bookworm.database import ASCENDING, GENRES, Document
from bookworm.exceptions import AlreadyExistsError
from bookworm.repositories.base import CollectionRepository, object_id, require

logger = logging.getLogger(__name__)


def same_name(name: str) -> Dict[str, str]:
    """
    Case-insensitive equality as an anchored, escaped regex.

    `$` would also match before a trailing newline, so the end is anchored
    with a lookahead that admits no further character at all.
    """
    return {"$regex": rf"^{re.escape(name)}(?![\s\S])", "$options": "i"}


class GenreRepository(CollectionRepository):
    collection_name = GENRES

    async def list_sorted(self) -> List[Document]:
        return await self.list(sort=[("name", ASCENDING)])

    async def _reject_duplicate(self, name: str, exclude_id: Optional[Any] = None) -> None:
        query: Dict[str, Any] = {"name": same_name(name)}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}

        duplicate = await self.collection.find_one(query)
        if duplicate:
            logger.info("Genre %r rejected, matches existing %r", name, duplicate.get("name"))
            raise AlreadyExistsError("Genre", context={"name": name})

    async def create_unique(self, payload: Dict[str, Any]) -> Document:
        """
        Raises:
            MissingFieldError: name absent
            AlreadyExistsError: a genre with a case-insensitively equal name exists
        """
        require(payload, "name")
        await self._reject_duplicate(str(payload["name"]))
        return await self.create(payload)

    async def update(self, document_id: Any, partial: Document) -> Document:
        """
        Partial merge; a new `name` must not collide with another genre.

        Renaming a genre to a different casing of its own name is allowed.
        """
        genre_id = object_id(document_id)
        if partial.get("name") is not None:
            await self._reject_duplicate(str(partial["name"]), exclude_id=genre_id)
        return await super().update(genre_id, partial)
