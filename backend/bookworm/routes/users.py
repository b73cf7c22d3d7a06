"""
Bookworm Backend - User Routes
===============================

What:  GET /api/users, POST /api/users (register), POST /api/users/login.
How:   Bodies are taken as raw JSON objects and handed to UserRepository.
       Business errors (duplicate email, unknown email, wrong password)
       surface as 400 through the global handler.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bookworm.database import DocumentStore, get_store
from bookworm.repositories import UserRepository
from bookworm.responses import DocumentResponse
from bookworm.schemas.common import ErrorResponse, InsertResult, LoginResponse

router = APIRouter(prefix="/api/users", tags=["Users"])


def get_user_repository(store: DocumentStore = Depends(get_store)) -> UserRepository:
    return UserRepository(store)


@router.get("", summary="List all users (hashed passwords included)")
async def list_users(users: UserRepository = Depends(get_user_repository)):
    return DocumentResponse(await users.list_users())


@router.post(
    "",
    summary="Register a user",
    responses={
        200: {"model": InsertResult},
        400: {"description": "Email already registered", "model": ErrorResponse},
    },
)
async def register(
    payload: Dict[str, Any] = Body(...),
    users: UserRepository = Depends(get_user_repository),
):
    return DocumentResponse(await users.register(payload))


@router.post(
    "/login",
    summary="Check an email / password pair",
    responses={
        200: {"model": LoginResponse},
        400: {"description": "User not found or invalid password", "model": ErrorResponse},
    },
)
async def login(
    payload: Dict[str, Any] = Body(...),
    users: UserRepository = Depends(get_user_repository),
):
    return DocumentResponse(await users.login(payload))
