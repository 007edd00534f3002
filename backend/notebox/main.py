"""
Notebox Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(repository) wires middleware, exception handlers and
       routers, and attaches the note repository to `app.state`.
Who:   Called by the `notebox` entry point (server.py) with an already
       opened SqlNoteRepository, by tests with an InMemoryNoteRepository,
       and by `uvicorn notebox.main:app` with nothing injected.

Lifecycle:
    Startup:
    1. Configure logging
    2. If no repository was injected: open the store (connect with retry,
       sync schema). No request is served until this resolves.

    Shutdown:
    1. Dispose the engine opened in step 2, if any
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notebox import __version__
from notebox.bootstrap import open_store
from notebox.config import Settings, settings
from notebox.exceptions import DatabaseError, NotFoundError, ValidationError
from notebox.middleware.access import AccessLogMiddleware, request_id_var
from notebox.repositories.base import NoteRepository
from notebox.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] notebox.bootstrap: message

    SQL statements are logged through `sqlalchemy.engine` at INFO when
    DB_LOG_STATEMENTS is on (the default).
    """
    config = config or settings
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if config.db_log_statements else logging.WARNING
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store when the app was built without one; close it on shutdown.

    A StartupError raised here aborts server startup.
    """
    engine = None
    if app.state.repository is None:
        config = app.state.config
        setup_logging(config)
        logger.info("Notebox Backend starting up...")
        engine, app.state.repository = await open_store(config)

    yield

    if engine is not None:
        logger.info("Notebox Backend shutting down...")
        await engine.dispose()
        app.state.repository = None
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the `{"error": ...}` body.

    Handler hierarchy:
        RequestValidationError / ValidationError → 400
        NotFoundError                            → 404
        DatabaseError                            → 500 (generic message)
        Exception (fallback)                     → 500

    Causes are logged server-side only.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed JSON, missing fields, wrong types, blank title."""
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "invalid value"),
            }
            for err in exc.errors()
        ]
        return await handle_validation_error(request, ValidationError(details=details))

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s %s", rid, exc.message, exc.details)
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.message,
                "details": exc.details,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Store failure: per-operation message to the client, context to the log."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Runs outside the middleware stack, so the ID header is set here."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "request_id": rid},
            headers={"X-Request-ID": rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    repository: Optional[NoteRepository] = None,
    config: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        repository: Store the handlers should use. When omitted, the
            lifespan opens the SQL store from configuration at startup.
        config: Settings for CORS origins and, when no repository is
            injected, for the store the lifespan opens (defaults to the
            singleton).
    """
    config = config or settings

    app = FastAPI(
        title="Notebox API",
        description="Minimal note-taking REST API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.repository = repository
    app.state.config = config

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: AccessLog → GZip → CORS

    # Permissive cross-origin policy; credentials cannot be combined with "*"
    origins = config.cors_origins_list or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(AccessLogMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# `uvicorn notebox.main:app` opens the store in the lifespan
app = create_app()
