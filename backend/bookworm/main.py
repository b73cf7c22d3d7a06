"""
Bookworm Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; `app` at module
       level is what uvicorn serves (uvicorn bookworm.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /api/ users books genres tutorials shelves reviews │
    │  /health                                            │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ BusinessRuleError→400 │ anything else→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect the document store and ping it; on failure log and abort
    Shutdown:
    1. Close the store connection

    A store passed to create_app() (tests) is used as-is and is neither
    connected nor closed by the lifespan.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookworm import __version__
from bookworm.config import settings
from bookworm.database import DocumentStore, MongoDocumentStore
from bookworm.exceptions import BusinessRuleError, DatabaseError
from bookworm.middleware.logging import RequestLoggingMiddleware
from bookworm.middleware.request_id import RequestIDMiddleware, request_id_var
from bookworm.routes import books, genres, health, reviews, root, shelves, tutorials, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(store: Optional[DocumentStore]):
    """Lifespan bound to an injected store, or to a fresh MongoDocumentStore."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if store is not None:
            app.state.store = store
            yield
            return

        setup_logging()
        logger.info("=" * 60)
        logger.info("Bookworm Backend starting up...")

        mongo = MongoDocumentStore()
        try:
            await mongo.connect()
        except DatabaseError as e:
            logger.error("MongoDB connection error: %s | Context: %s", e.message, e.context)
            raise

        app.state.store = mongo
        logger.info("Database is breathing on http://localhost:%d/", settings.port)
        logger.info("=" * 60)

        yield

        logger.info("Bookworm Backend shutting down...")
        await mongo.close()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        BusinessRuleError  → 400 {"message", "request_id"}
        Exception          → 500 generic body, stack trace logged server-side
    """

    @app.exception_handler(BusinessRuleError)
    async def handle_business_rule(request: Request, exc: BusinessRuleError):
        rid = request_id_var.get("")
        logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Pre-built document store. When omitted, the lifespan connects
               a MongoDocumentStore from settings at startup.
    """
    app = FastAPI(
        title="Bookworm API",
        description=(
            "Book-cataloging backend: user accounts, books, genres, tutorials, "
            "reading shelves and reviews over MongoDB."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=build_lifespan(store),
    )
    if store is not None:
        app.state.store = store

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins_list != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(root.router)
    app.include_router(users.router)
    app.include_router(books.router)
    app.include_router(genres.router)
    app.include_router(tutorials.router)
    app.include_router(shelves.router)
    app.include_router(reviews.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("bookworm.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
