"""
Mflix API: FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers; the
       lifespan owns logging setup and the MongoDB client.
Who:   uvicorn (`uvicorn mflix_api.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware:   Request ID → Logging → GZip → CORS        │
    │                                                          │
    │  Routes:  /api/movies   /api/comments   /api/theaters    │
    │           /api/movies/{id}/comments     /health          │
    │                                                          │
    │  Exception Handlers:                                     │
    │   ValidationError→400 │ NotFoundError→404 │ Internal→500 │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config validation → MongoDB ping (with retries)
    Shutdown: close the shared MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from mflix_api import __version__
from mflix_api import database
from mflix_api.config import settings
from mflix_api.exceptions import (
    InternalError,
    MflixError,
    NotFoundError,
    ValidationError,
)
from mflix_api.middleware.logging import RequestLoggingMiddleware
from mflix_api.middleware.request_id import RequestIDMiddleware, request_id_var
from mflix_api.routes import comments, health, movies, theaters

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure root logging once, before anything else in the lifespan.

    Format: 2024-01-15T12:00:00 [INFO] mflix_api.access: GET /api/comments 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],  # Docker captures stdout
        force=True,
    )

    # Per-operation chatter from these libraries drowns out the access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate configuration (logged, not fatal: /health reports it)
        3. Create the shared client and ping it, retrying while it boots

    Shutdown:
        1. Close the shared client
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Mflix API starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")
    else:
        try:
            await database.wait_for_database()
        except Exception as e:
            logger.error("Error connecting to the database: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Mflix API shutting down...")
    database.close_client()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status: int, message: str, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "status": status,
            "message": message,
            "error": error,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the error envelope.

        ValidationError        → 400
        RequestValidationError → 400 (FastAPI's body/param schema failures)
        NotFoundError          → 404
        InternalError          → 500
        MflixError (base)      → 500
        Exception (fallback)   → 500

    Context dicts and driver messages are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s (%s)", request_id_var.get(""), exc.message, exc.detail)
        return _error_response(400, exc.message, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = "Request could not be validated"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            detail = f"{location}: {first.get('msg', 'invalid value')}"
        logger.warning("[%s] Invalid request body: %s", request_id_var.get(""), detail)
        return _error_response(400, "Invalid request body", detail)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc.message, exc.detail)

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        logger.error(
            "[%s] Internal error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return _error_response(500, exc.message, exc.detail)

    @app.exception_handler(MflixError)
    async def handle_mflix_error(request: Request, exc: MflixError):
        logger.error(
            "[%s] Unhandled application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, "Internal Server Error", exc.detail)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(500, "Internal Server Error", type(exc).__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Mflix API",
        description=(
            "REST endpoints over the sample_mflix MongoDB dataset: movies, "
            "their comments, and theaters, with page/limit pagination."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(movies.router)
    app.include_router(comments.router)
    app.include_router(theaters.router)
    app.include_router(health.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port)
