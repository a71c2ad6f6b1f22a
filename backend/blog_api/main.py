"""
Blog API Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn blog_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────┐ ┌─────────────────┐       │
    │  │ /posts, /posts/{id}  │ │ GET /health     │       │
    │  └──────────────────────┘ └─────────────────┘       │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Store→503/500 │  │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, open the store engine
    Shutdown: dispose the store engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blog_api import __version__
from blog_api.config import settings
from blog_api.database import dispose_engine, init_engine
from blog_api.exceptions import (
    BlogApiError,
    DatabaseError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import RequestIDMiddleware, request_id_var
from blog_api.routes import health, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before the engine is opened.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(database_url: Optional[str] = None):
    """
    Lifespan bound to a database URL (settings.database_url when None).

    The store engine is opened exactly once on startup and released once on
    shutdown; handlers reach it through the get_db_session dependency.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging()
        logger.info("Blog API %s starting up...", __version__)

        init_engine(database_url)
        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

        yield

        logger.info("Blog API shutting down...")
        await dispose_engine()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        body["details"] = details
    return body


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """Flatten Pydantic error locations ("body", "author", "firstName") to dotted names.

    Integer parts (JSON decode offsets, list indexes) are dropped; an error
    with no named part is reported against "body".
    """
    fields = []
    for err in exc.errors():
        loc = [
            part for part in err.get("loc", ())
            if isinstance(part, str) and part not in ("body", "path")
        ]
        fields.append({
            "field": ".".join(loc) or "body",
            "message": err.get("msg", "invalid value"),
        })
    return fields


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 Bad Request (schema failure on body or path)
        ValidationError         → 400 Bad Request
        NotFoundError           → 404 Not Found
        StoreUnavailableError   → 503 Service Unavailable
        DatabaseError           → 500 Internal Server Error
        BlogApiError (base)     → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Responses never include driver messages or stack traces; those are logged.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        fields = _field_errors(exc)
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), fields)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Request validation failed", {"fields": fields}),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        logger.error("[%s] Store unavailable | Context: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=503,
            content=_error_body("store_unavailable", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "An internal error occurred. Please try again later."),
        )

    @app.exception_handler(BlogApiError)
    async def handle_app_error(request: Request, exc: BlogApiError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database_url: Store URL opened by the lifespan; settings.database_url when None.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Blog API",
        description="CRUD API for blog posts with nested author names.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=build_lifespan(database_url),
    )

    # Middleware executes in reverse order of addition: RequestID runs first
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(posts.router)
    app.include_router(health.router)

    return app


# uvicorn expects `blog_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn using configured host/port."""
    import uvicorn

    uvicorn.run(
        "blog_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
