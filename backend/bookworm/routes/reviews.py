"""
Bookworm Backend - Review Routes
=================================

    GET  /api/reviews/{book_id}   approved reviews for a book, newest first
    POST /api/reviews             submit; always stored as pending
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bookworm.database import DocumentStore, get_store
from bookworm.repositories import ReviewRepository
from bookworm.responses import DocumentResponse
from bookworm.schemas.common import InsertResult

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


def get_review_repository(store: DocumentStore = Depends(get_store)) -> ReviewRepository:
    return ReviewRepository(store)


@router.get("/{book_id}", summary="List approved reviews for a book")
async def list_reviews(book_id: str, reviews: ReviewRepository = Depends(get_review_repository)):
    return DocumentResponse(await reviews.list_approved(book_id))


@router.post("", summary="Submit a review for moderation", responses={200: {"model": InsertResult}})
async def submit_review(
    payload: Dict[str, Any] = Body(...),
    reviews: ReviewRepository = Depends(get_review_repository),
):
    return DocumentResponse(await reviews.submit(payload))
