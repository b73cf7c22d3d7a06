"""Bookworm Backend - Tutorial Repository (newest first)."""

from typing import List

from bookworm.database import DESCENDING, TUTORIALS, Document
from bookworm.repositories.base import CollectionRepository


class TutorialRepository(CollectionRepository):
    collection_name = TUTORIALS

    async def list_newest_first(self) -> List[Document]:
        # ObjectIds grow with insertion time
        return await self.list(sort=[("_id", DESCENDING)])
