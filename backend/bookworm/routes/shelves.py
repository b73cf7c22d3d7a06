"""
Bookworm Backend - Shelf Routes
================================

What:  POST /api/shelves upserts the entry for (userId, bookInfo).

Example body:
    {"userId": "u1", "bookInfo": {"id": "...", "title": "Dune"}, "shelf": "reading"}
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bookworm.database import DocumentStore, get_store
from bookworm.repositories import ShelfRepository
from bookworm.responses import DocumentResponse
from bookworm.schemas.common import UpdateResult

router = APIRouter(prefix="/api/shelves", tags=["Shelves"])


def get_shelf_repository(store: DocumentStore = Depends(get_store)) -> ShelfRepository:
    return ShelfRepository(store)


@router.post("", summary="Put a book on a user's shelf", responses={200: {"model": UpdateResult}})
async def upsert_shelf(
    payload: Dict[str, Any] = Body(...),
    shelves: ShelfRepository = Depends(get_shelf_repository),
):
    return DocumentResponse(await shelves.upsert(payload))
