"""
Users API - FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, database lifecycle, middleware, exception
       handlers and route mounting in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`users_api.main:app`) and by `users-api` (cli.py).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐              │
    │  │   Req ID     │→│    Logging      │              │
    │  └──────────────┘ └─────────────────┘              │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────────────────┐ ┌─────────────────┐   │
    │  │ GET/POST/PUT/DELETE     │ │ GET /health     │   │
    │  │ /api/v1/users[/{id}]    │ │                 │   │
    │  └─────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to MongoDB (fatal on failure: startup aborts, process exits)
    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from users_api import __version__
from users_api.config import settings
from users_api.database import MongoHandle, connect
from users_api.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    NotFoundError,
    UsersApiError,
    ValidationError,
)
from users_api.middleware.logging import RequestLoggingMiddleware
from users_api.middleware.request_id import RequestIDMiddleware, request_id_var
from users_api.routes import health, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before the database connects.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Driver topology/heartbeat events and uvicorn's own access log are noisy
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage the MongoDB client for the lifetime of the process.

    If a handle was supplied to create_app() it is used as is and left open
    on shutdown; otherwise one is created here and closed on shutdown.
    A connection failure is logged and re-raised, which makes uvicorn abort
    startup and exit. There is no retry.
    """
    setup_logging()
    logger.info("Users API %s starting up...", __version__)

    owns_client = getattr(app.state, "mongo", None) is None
    if owns_client:
        try:
            app.state.mongo = await connect(settings)
        except DatabaseConnectionError as e:
            logger.critical("%s | Context: %s", e.message, e.context)
            raise

    logger.info("Server ready")

    yield

    logger.info("Users API shutting down...")
    if owns_client:
        await app.state.mongo.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError          → 400 Bad Request (malformed id)
        RequestValidationError   → 400 Bad Request (malformed body)
        NotFoundError            → 404 Not Found
        DatabaseError            → 500 Internal Server Error
        UsersApiError (base)     → 500 Internal Server Error
        Exception (fallback)     → 500 Internal Server Error

    Driver error text is logged server-side, never returned in the body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body could not be decoded into the expected schema."""
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request body could not be decoded",
                "details": jsonable_encoder(exc.errors()),
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(UsersApiError)
    async def handle_app_error(request: Request, exc: UsersApiError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(mongo: Optional[MongoHandle] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        mongo: An already connected handle. When omitted, the lifespan
               connects using `settings` at startup.
    """
    app = FastAPI(
        title="Users API",
        description="CRUD service for user records stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    if mongo is not None:
        app.state.mongo = mongo

    # Middleware executes in REVERSE order of addition: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()
