"""
Scholarship Portal Backend — FastAPI Application Factory
=========================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn scholarship_portal.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│ Logging  │→│  GZip  │→│     CORS     │  │
    │  └──────────┘ └──────────┘ └────────┘ └──────────────┘  │
    │                                                          │
    │  Routers:                                                │
    │  health · scholarships · users · reviews ·               │
    │  applications · payments                                 │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ NotFound→404 │ Conflict→409 │          │
    │  Database→500   │ Payment→503  │ Circuit→503             │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Open the database handle, create missing tables if enabled

    Shutdown:
    1. Dispose the database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from scholarship_portal import __version__
from scholarship_portal.config import settings
from scholarship_portal.database import Database
from scholarship_portal.exceptions import (
    CircuitBreakerOpenError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    PaymentServiceError,
    ScholarshipPortalError,
    ValidationError,
)
from scholarship_portal.middleware.logging import RequestLoggingMiddleware
from scholarship_portal.middleware.request_id import RequestIDMiddleware, request_id_var
from scholarship_portal.routes import applications, health, payments, reviews, scholarships, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
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

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("stripe").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the database handle for the lifetime of the application.

    The handle lives on `app.state.database`; request sessions are drawn
    from it by `get_db_session`. A missing payment key is logged but does
    not stop the server, since every collection route still works.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Scholarship Portal backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    database = Database.from_settings(settings)
    if settings.db_create_schema:
        await database.create_schema()
    app.state.database = database

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Scholarship Portal backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a common error body.

    Handler hierarchy:
        ValidationError              → 400 Bad Request
        RequestValidationError       → 422 Unprocessable Entity
        NotFoundError                → 404 Not Found
        ConflictError                → 409 Conflict
        DatabaseError                → 500 Internal Server Error
        PaymentServiceError          → 503 Service Unavailable
        CircuitBreakerOpenError      → 503 Service Unavailable
        ScholarshipPortalError       → 500 Internal Server Error
        Exception (fallback)         → 500 Internal Server Error

    Server-side failures never expose internals in the response; details
    are logged with the request ID instead.
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
        """FastAPI's 422 body without the rejected input, which may be NaN or Infinity."""
        errors = [{k: v for k, v in error.items() if k != "input"} for error in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

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

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        rid = request_id_var.get("")
        logger.warning("[%s] Conflict: %s", rid, exc.message)
        return JSONResponse(
            status_code=409,
            content={
                "error": "conflict",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(CircuitBreakerOpenError)
    async def handle_circuit_breaker(request: Request, exc: CircuitBreakerOpenError):
        rid = request_id_var.get("")
        logger.warning("[%s] Circuit breaker open: %s", rid, exc.message)
        return JSONResponse(
            status_code=503,
            content={
                "error": "service_unavailable",
                "message": exc.message,
                "details": {"recovery_time": exc.recovery_time},
                "request_id": rid,
            },
            headers={"Retry-After": str(exc.recovery_time)},
        )

    @app.exception_handler(PaymentServiceError)
    async def handle_payment_error(request: Request, exc: PaymentServiceError):
        rid = request_id_var.get("")
        logger.error("[%s] Payment service error: %s", rid, exc.message)
        headers = {}
        if exc.retry_after:
            headers["Retry-After"] = str(exc.retry_after)
        return JSONResponse(
            status_code=503,
            content={
                "error": "payment_service_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
            headers=headers,
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(ScholarshipPortalError)
    async def handle_application_error(request: Request, exc: ScholarshipPortalError):
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
        """Catch-all: generic 500 body, stack trace logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build their own instance and set `app.state.database` directly
    instead of running the lifespan.
    """
    app = FastAPI(
        title="Scholarship Portal API",
        description=(
            "Backend for a scholarship portal: scholarships, users and roles, "
            "reviews, scholarship applications, and Stripe payment intents for "
            "application fees."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )

    # Skip compressing small responses
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(scholarships.router)
    app.include_router(users.router)
    app.include_router(reviews.router)
    app.include_router(applications.router)
    app.include_router(payments.router)

    return app


# uvicorn imports `scholarship_portal.main:app`
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "scholarship_portal.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
