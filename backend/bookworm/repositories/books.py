"""
Bookworm Backend - Book Repository
===================================

What:  CRUD on the `books` collection plus the filtered listing used by
       GET /api/books?search=&genre=.

Listing filter:
    search → {"$or": [{"title": ~search}, {"author": ~search}]}
             (~ = case-insensitive literal substring)
    genre  → {"genre": genre} (exact)
    neither → {} (all books)
"""

import re
from typing import Any, Dict, List, Optional

from bookworm.database import BOOKS, Document
from bookworm.repositories.base import CollectionRepository


def contains(term: str) -> Dict[str, str]:
    """Case-insensitive substring match on a literal term."""
    return {"$regex": re.escape(term), "$options": "i"}


def build_book_filter(search: Optional[str] = None, genre: Optional[str] = None) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if search:
        query["$or"] = [
            {"title": contains(search)},
            {"author": contains(search)},
        ]
    if genre:
        query["genre"] = genre
    return query


class BookRepository(CollectionRepository):
    collection_name = BOOKS

    async def search(
        self, search: Optional[str] = None, genre: Optional[str] = None
    ) -> List[Document]:
        return await self.list(build_book_filter(search, genre))
