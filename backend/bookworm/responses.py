"""
Bookworm Backend - Document Response
=====================================

What:  JSONResponse that can render raw store results.
How:   Runs FastAPI's jsonable_encoder with an ObjectId → str encoder before
       the normal JSON rendering; datetimes come out as ISO 8601.
Who:   Returned by every route that writes a store result back to the client.
       Routes return the response object directly so FastAPI's own encoder,
       which has no ObjectId support, never sees the raw document.
"""

from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

BSON_ENCODERS = {ObjectId: str}


class DocumentResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return super().render(jsonable_encoder(content, custom_encoder=BSON_ENCODERS))
