"""
Bookworm Backend - Book Routes
===============================

What:  CRUD for books and the filtered listing.

    POST   /api/books                     create
    GET    /api/books?search=&genre=      list / filter
    GET    /api/books/{book_id}           fetch one (null when absent)
    PATCH  /api/books/{book_id}           partial update
    DELETE /api/books/{book_id}           delete (deletedCount 0 when absent)

A book_id that is not a valid ObjectId is not handled here; the error reaches
the catch-all handler.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from bookworm.database import DocumentStore, get_store
from bookworm.repositories import BookRepository
from bookworm.responses import DocumentResponse
from bookworm.schemas.common import DeleteResult, InsertResult, UpdateResult

router = APIRouter(prefix="/api/books", tags=["Books"])


def get_book_repository(store: DocumentStore = Depends(get_store)) -> BookRepository:
    return BookRepository(store)


@router.post("", summary="Create a book", responses={200: {"model": InsertResult}})
async def create_book(
    payload: Dict[str, Any] = Body(...),
    books: BookRepository = Depends(get_book_repository),
):
    return DocumentResponse(await books.create(payload))


@router.get("", summary="List books, optionally filtered")
async def list_books(
    search: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring of the title or author",
    ),
    genre: Optional[str] = Query(default=None, description="Exact genre"),
    books: BookRepository = Depends(get_book_repository),
):
    return DocumentResponse(await books.search(search=search, genre=genre))


@router.get("/{book_id}", summary="Fetch one book")
async def get_book(book_id: str, books: BookRepository = Depends(get_book_repository)):
    return DocumentResponse(await books.get(book_id))


@router.patch("/{book_id}", summary="Partially update a book", responses={200: {"model": UpdateResult}})
async def update_book(
    book_id: str,
    payload: Dict[str, Any] = Body(...),
    books: BookRepository = Depends(get_book_repository),
):
    return DocumentResponse(await books.update(book_id, payload))


@router.delete("/{book_id}", summary="Delete a book", responses={200: {"model": DeleteResult}})
async def delete_book(book_id: str, books: BookRepository = Depends(get_book_repository)):
    return DocumentResponse(await books.delete(book_id))
