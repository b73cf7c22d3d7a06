"""
Bookworm Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── store: InMemoryDocumentStore, fresh per test (no MongoDB needed)
    ├── test_client: HTTPX AsyncClient bound to create_app(store=store)
    └── sample_book / sample_user: payload dicts
"""

import copy
import os
import re
from typing import Any, Dict, List, Mapping, Optional

# Override settings for testing BEFORE any bookworm imports
os.environ["DB_URI"] = "mongodb://localhost:27017"
os.environ["BCRYPT_ROUNDS"] = "4"  # minimum cost keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from bookworm.database import (
    Document,
    DocumentCollection,
    DocumentStore,
    Filter,
    SortSpec,
    delete_result,
    insert_result,
    update_result,
)


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Document Store
# ══════════════════════════════════════════════════════════════════════════

_MISSING = object()


def _is_operator(value: Any) -> bool:
    return isinstance(value, dict) and any(key.startswith("$") for key in value)


def matches(document: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
    """Evaluates the filter subset the application uses: equality, $regex, $ne, $or, $and."""
    for key, condition in filter.items():
        if key == "$or":
            if not any(matches(document, sub) for sub in condition):
                return False
        elif key == "$and":
            if not all(matches(document, sub) for sub in condition):
                return False
        else:
            value = document.get(key, _MISSING)
            if isinstance(condition, dict) and "$regex" in condition:
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                    return False
            elif isinstance(condition, dict) and "$ne" in condition:
                if value is not _MISSING and value == condition["$ne"]:
                    return False
            elif value is _MISSING or value != condition:
                return False
    return True


class InMemoryCollection(DocumentCollection):
    def __init__(self):
        self.documents: List[Document] = []

    async def insert_one(self, document: Document) -> Document:
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return insert_result(document["_id"])

    async def find(self, filter: Filter, sort: Optional[SortSpec] = None) -> List[Document]:
        found = [copy.deepcopy(d) for d in self.documents if matches(d, filter)]
        for field, direction in reversed(list(sort or [])):
            found.sort(
                key=lambda d: (d.get(field) is not None, d.get(field)),
                reverse=direction < 0,
            )
        return found

    async def find_one(self, filter: Filter) -> Optional[Document]:
        for document in self.documents:
            if matches(document, filter):
                return copy.deepcopy(document)
        return None

    async def update_one(
        self, filter: Filter, update: Mapping[str, Any], upsert: bool = False
    ) -> Document:
        changes = update.get("$set", {})
        for document in self.documents:
            if matches(document, filter):
                before = copy.deepcopy(document)
                document.update(copy.deepcopy(changes))
                return update_result(1, int(document != before))
        if not upsert:
            return update_result(0, 0)
        # Upserts seed the new document with the filter's equality fields
        created = {
            key: copy.deepcopy(value) for key, value in filter.items()
            if not key.startswith("$") and not _is_operator(value)
        }
        created.update(copy.deepcopy(changes))
        created.setdefault("_id", ObjectId())
        self.documents.append(created)
        return update_result(0, 0, created["_id"])

    async def delete_one(self, filter: Filter) -> Document:
        for index, document in enumerate(self.documents):
            if matches(document, filter):
                del self.documents[index]
                return delete_result(1)
        return delete_result(0)


class InMemoryDocumentStore(DocumentStore):
    def __init__(self):
        self.collections: Dict[str, InMemoryCollection] = {}
        self.available = True

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def ping(self) -> bool:
        return self.available

    def collection(self, name: str) -> InMemoryCollection:
        return self.collections.setdefault(name, InMemoryCollection())


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def sample_user() -> Dict[str, Any]:
    return {"name": "Bilbo Baggins", "email": "bilbo@shire.me", "password": "precious-123"}


@pytest.fixture
def sample_book() -> Dict[str, Any]:
    return {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy"}


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to a fresh app over ASGITransport.

    raise_app_exceptions=False lets tests observe the catch-all 500 response
    instead of the re-raised exception.
    """
    from bookworm.main import create_app

    app = create_app(store=store)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
