"""
Bookworm Backend - Genre Routes
================================

    GET    /api/genres               list, sorted by name
    POST   /api/genres               create (400 on a case-insensitive duplicate)
    PATCH  /api/genres/{genre_id}    partial update
    DELETE /api/genres/{genre_id}    delete
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bookworm.database import DocumentStore, get_store
from bookworm.repositories import GenreRepository
from bookworm.responses import DocumentResponse
from bookworm.schemas.common import DeleteResult, ErrorResponse, InsertResult, UpdateResult

router = APIRouter(prefix="/api/genres", tags=["Genres"])


def get_genre_repository(store: DocumentStore = Depends(get_store)) -> GenreRepository:
    return GenreRepository(store)


@router.get("", summary="List genres by name")
async def list_genres(genres: GenreRepository = Depends(get_genre_repository)):
    return DocumentResponse(await genres.list_sorted())


@router.post(
    "",
    summary="Create a genre",
    responses={
        200: {"model": InsertResult},
        400: {"description": "Genre name already taken", "model": ErrorResponse},
    },
)
async def create_genre(
    payload: Dict[str, Any] = Body(...),
    genres: GenreRepository = Depends(get_genre_repository),
):
    return DocumentResponse(await genres.create_unique(payload))


@router.patch("/{genre_id}", summary="Partially update a genre", responses={200: {"model": UpdateResult}})
async def update_genre(
    genre_id: str,
    payload: Dict[str, Any] = Body(...),
    genres: GenreRepository = Depends(get_genre_repository),
):
    return DocumentResponse(await genres.update(genre_id, payload))


@router.delete("/{genre_id}", summary="Delete a genre", responses={200: {"model": DeleteResult}})
async def delete_genre(genre_id: str, genres: GenreRepository = Depends(get_genre_repository)):
    return DocumentResponse(await genres.delete(genre_id))
