"""
Bookworm Backend - Application Package Initializer
===================================================

What: The `bookworm` package, a book-cataloging API over MongoDB.
Who:  Imported by uvicorn (`bookworm.main:app`), pytest, and the entry point.

Architecture Note:
    ┌─────────────────────────────────────┐
    │       Routes (Route Dispatcher)     │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Repositories (one per collection) │  ← per-entity rules, raw results
    ├─────────────────────────────────────┤
    │  Security (Credential Verifier)     │  ← bcrypt hash / verify
    ├─────────────────────────────────────┤
    │   Database (Document Store Client)  │  ← pymongo AsyncMongoClient
    └─────────────────────────────────────┘

    Routes extract path and query parameters, call exactly one repository
    operation and write back whatever the store returned.
"""

__version__ = "1.0.0"
