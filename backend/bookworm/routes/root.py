"""Bookworm Backend - Liveness text at GET /api/."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(prefix="/api", tags=["Root"])


@router.get("/", response_class=PlainTextResponse, summary="Liveness text")
async def hello() -> str:
    return "Hello World!"
