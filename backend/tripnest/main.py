"""
TripNest Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn imports `tripnest.main:app`; tests call create_app(store=...).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌────────┐ ┌─────────┐  │
    │  │  Req ID  │→│ Logging  │→│  GZip  │→│  CORS   │  │
    │  └──────────┘ └──────────┘ └────────┘ └─────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /  ·  /tourist-spot[/{id}]  ·  /my-list/{email}    │
    │  /health                                            │
    │                                                     │
    │  Exception Handlers:                                │
    │  TripNestError → status from ErrorKind (400/404/500)│
    │  Exception     → 500                                │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate store credentials (abort startup if missing)
    3. Create the MongoStore and ping the deployment

    Shutdown:
    1. Close the MongoStore (only if the app created it)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from tripnest import __version__
from tripnest.config import settings
from tripnest.database import MongoStore
from tripnest.exceptions import ConfigurationError, ErrorKind, TripNestError
from tripnest.middleware.logging import RequestLoggingMiddleware
from tripnest.middleware.request_id import RequestIDMiddleware, request_id_var
from tripnest.routes import health, tourist_spots, welcome

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    What:    Root logger writing to stdout at settings.log_level.
    When:    Called once by the CLI and again (idempotently) by the lifespan.

    Format: 2024-06-04T10:15:00 [INFO] tripnest.access: GET /tourist-spot 200 4.2ms ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Per-operation chatter from the server and driver
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Acquire the document store on startup and release it on shutdown.

    A store already present on app.state (injected through create_app) is
    used as-is and left open; its owner closes it.

    Raises:
        ConfigurationError if DB_USER or DB_PASSWORD is missing. Starlette
        reports the failed startup and uvicorn exits.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("TripNest Backend starting up...")

    owned_store: Optional[MongoStore] = None
    if getattr(app.state, "store", None) is None:
        try:
            settings.validate_required()
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e.message)
            raise

        owned_store = MongoStore.from_settings(settings)
        try:
            await owned_store.connect()
        except Exception:
            logger.error("Error connecting to MongoDB", exc_info=True)
            await owned_store.close()
            raise
        app.state.store = owned_store

    logger.info("Server ready on http://%s:%d", settings.host, settings.port)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("TripNest Backend shutting down...")
    if owned_store is not None:
        await owned_store.close()
        app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application errors to HTTP responses in one place.

    Handler hierarchy:
        TripNestError  → status_code of its ErrorKind
                         (BadRequestError 400, NotFoundError 404, InternalError 500)
        Exception      → 500 Internal Server Error (unexpected errors)

    Internal errors keep their operation message ("Error adding tourist spot")
    in the body; driver details from `context` are logged server-side only.
    """

    @app.exception_handler(TripNestError)
    async def handle_tripnest_error(request: Request, exc: TripNestError):
        rid = request_id_var.get("")
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, exc.code, exc.message)
        return JSONResponse(
            status_code=exc.kind.status_code,
            content={
                "error": exc.code,
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: a generic 500 with a request ID; stack trace is logged only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[MongoStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Optional pre-built store handle. When given, the lifespan skips
               credential validation and connection, and never closes it.
    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="TripNest API",
        description="REST API for the TripNest tourist spot collection.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → GZip → CORS
    cors_origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(welcome.router)
    app.include_router(tourist_spots.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `tripnest.main:app` to be importable
app = create_app()
