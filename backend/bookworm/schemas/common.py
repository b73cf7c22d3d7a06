"""
Bookworm Backend - Pydantic Response Schemas
=============================================

What:  Models describing the fixed-shape responses in the OpenAPI docs.
How:   Entity documents are schemaless and pass through untouched, so only
       store result envelopes, errors and the health payload are modelled.
       Routes reference these in `responses=` for documentation; the bodies
       themselves are rendered by DocumentResponse.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class InsertResult(BaseModel):
    acknowledged: bool = Field(description="Write was acknowledged by the server")
    insertedId: str = Field(description="Generated ObjectId (hex)")


class UpdateResult(BaseModel):
    acknowledged: bool
    matchedCount: int = Field(description="Documents matched by the filter")
    modifiedCount: int = Field(description="Documents actually changed")
    upsertedCount: int = Field(default=0, description="1 when an upsert inserted")
    upsertedId: Optional[str] = Field(default=None, description="Id of the upserted document")


class DeleteResult(BaseModel):
    acknowledged: bool
    deletedCount: int = Field(description="0 when nothing matched")


class LoginResponse(BaseModel):
    message: str = Field(description="Always 'Login successful'")
    existingUser: Dict[str, Any] = Field(description="Stored user document, hash included")


class ErrorResponse(BaseModel):
    """
    Body of every 400 / 500 response.

    Example:
        {"message": "User already exists", "request_id": "a1b2c3d4"}
    """
    message: str = Field(description="Short, human-readable explanation")
    request_id: str = Field(default="", description="Correlates with server logs")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy | unhealthy")
    version: str
    database: str = Field(description="connected | disconnected")
    uptime_seconds: float
