"""
Blog API Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the Database and BlogService,
       stores them on app.state, registers middleware, exception handlers,
       routes and the static client mount.
Who:   uvicorn (`blog_api.main:app`), the `blog-api` console script, tests.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the database (SELECT 1 + create tables)
       → on failure, DatabaseConnectionError escapes the lifespan and
         uvicorn exits with a non-zero status
    Shutdown:
    1. Dispose the engine (close all pooled connections)

Error responses:
    Every failure is rendered as `{success: false, error, message}`:
    ValidationError / RequestValidationError → 400 "Validation failed"
    InvalidIdError                            → 400 "Invalid ID"
    NotFoundError                             → 404 "Not found"
    DatabaseError / unexpected exceptions     → 500 "Server error"
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api import __version__
from blog_api.config import Settings
from blog_api.database import Database
from blog_api.exceptions import BlogApiError, DatabaseConnectionError
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import RequestIdFilter, RequestIDMiddleware
from blog_api.routes import blogs, health, pages
from blog_api.schemas.blog import ErrorEnvelope
from blog_api.services.blog_service import BlogService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s"

# Loggers that are too chatty at INFO for a small CRUD service
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpcore", "httpx")


def setup_logging(level: str = "INFO") -> None:
    """Send every record to stdout, tagged with the current request id."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        handlers=[handler],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(settings.log_level)
    logger.info("Blog API starting up...")

    try:
        await database.connect()
    except DatabaseConnectionError as e:
        # Fatal: no retry loop, no degraded mode
        logger.critical("Database connection error: %s", e.message)
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Blog API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    category: str,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(error=category, message=message)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure onto the error envelope."""

    @app.exception_handler(BlogApiError)
    async def handle_blog_api_error(request: Request, exc: BlogApiError):
        if exc.status_code >= 500:
            logger.error("%s: %s | Context: %s", exc.category, exc.message, exc.context)
        else:
            logger.warning("%s: %s", exc.category, exc.message)
        return _error_response(exc.status_code, exc.category, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed JSON or wrongly-typed fields."""
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
        logger.warning("Request validation error: %s", detail)
        return _error_response(400, "Validation failed", f"Invalid request body: {detail}")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown routes and unsupported methods."""
        category = "Not found" if exc.status_code == 404 else "Request failed"
        # Keep framework headers such as Allow on 405
        return _error_response(
            exc.status_code, category, str(exc.detail), headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _error_response(500, "Server error", str(exc))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded singleton.
        database: Pre-built Database; defaults to one built from settings.
                  The lifespan connects it, so a caller that skips the
                  lifespan (e.g. httpx ASGITransport) must connect it first.
    """
    if settings is None:
        from blog_api.config import settings as default_settings
        settings = default_settings
    if database is None:
        database = Database.from_settings(settings)

    app = FastAPI(
        title="Blog API",
        description="Minimal blog-post CRUD service with a static browser client.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.blog_service = BlogService(database)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(blogs.router)
    app.include_router(health.router)
    app.include_router(pages.router)
    app.mount("/static", StaticFiles(directory=settings.static_dir, check_dir=False), name="static")

    return app


def run() -> None:
    """Console entry point: serve the default app with uvicorn."""
    import uvicorn

    from blog_api.config import settings

    uvicorn.run(
        "blog_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `blog_api.main:app` to be importable
app = create_app()
