"""Bookworm Backend - Tutorial Routes (list newest first, create, delete)."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bookworm.database import DocumentStore, get_store
from bookworm.repositories import TutorialRepository
from bookworm.responses import DocumentResponse
from bookworm.schemas.common import DeleteResult, InsertResult

router = APIRouter(prefix="/api/tutorials", tags=["Tutorials"])


def get_tutorial_repository(store: DocumentStore = Depends(get_store)) -> TutorialRepository:
    return TutorialRepository(store)


@router.get("", summary="List tutorials, newest first")
async def list_tutorials(tutorials: TutorialRepository = Depends(get_tutorial_repository)):
    return DocumentResponse(await tutorials.list_newest_first())


@router.post("", summary="Create a tutorial", responses={200: {"model": InsertResult}})
async def create_tutorial(
    payload: Dict[str, Any] = Body(...),
    tutorials: TutorialRepository = Depends(get_tutorial_repository),
):
    return DocumentResponse(await tutorials.create(payload))


@router.delete("/{tutorial_id}", summary="Delete a tutorial", responses={200: {"model": DeleteResult}})
async def delete_tutorial(
    tutorial_id: str,
    tutorials: TutorialRepository = Depends(get_tutorial_repository),
):
    return DocumentResponse(await tutorials.delete(tutorial_id))
