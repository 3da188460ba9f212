"""
XYFORA Backend — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn xyfora.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌─────────────────┐  │
    │  │  Req ID  │→│  Rate Limit  │→│  Access Log     │  │
    │  └──────────┘ └──────────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────────┐ ┌────────────┐  │
    │  │ /auth/*      │ │ /products/*   │ │ /health    │  │
    │  └──────────────┘ └───────────────┘ └────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ XyforaError→kind.status │ body→400 │ *→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → optional schema creation
    Shutdown: dispose database engine
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

from xyfora import __version__
from xyfora.config import settings
from xyfora.database import create_schema, dispose_engine
from xyfora.exceptions import ErrorKind, RateLimitExceededError, XyforaError
from xyfora.middleware.logging import RequestLoggingMiddleware
from xyfora.middleware.rate_limit import RateLimitMiddleware
from xyfora.middleware.request_id import RequestIDMiddleware, request_id_var
from xyfora.routes import auth, health, products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
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

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("XYFORA Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving (health checks still work); the warning is loud enough
        logger.error("Configuration error: %s", str(e))

    if settings.db_create_schema:
        await create_schema()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("XYFORA Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # request.state outlives the middleware's ContextVar reset
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _error_body(kind: ErrorKind, message: str, request: Request, details=None) -> dict:
    body = {
        "error": kind.value,
        "message": message,
        "request_id": _request_id(request),
    }
    if details:
        body["details"] = details
    return body


def _validation_message(errors: list) -> str:
    if len(errors) == 1 and errors[0].get("type") == "value_error":
        # model-level rule, e.g. "At least one field is required"
        return errors[0]["msg"].removeprefix("Value error, ")
    return "Request validation failed"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to one JSON shape:
        {"error": <ErrorKind value>, "message": ..., "details"?: ..., "request_id": ...}

    Handler hierarchy:
        XyforaError             → kind.status_code (400/401/403/404/429/500)
        RequestValidationError  → 400 validation_error (FastAPI default is 422)
        Exception (fallback)    → 500 internal_server_error

    Internal details (tracebacks, SQL, token contents) are logged, never
    returned.
    """

    @app.exception_handler(XyforaError)
    async def handle_application_error(request: Request, exc: XyforaError):
        rid = _request_id(request)
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
            return JSONResponse(
                status_code=exc.status_code,
                content=_error_body(
                    exc.kind,
                    "An internal error occurred. Please try again later.",
                    request,
                ),
            )

        if exc.kind is ErrorKind.VALIDATION:
            logger.warning("[%s] Validation error: %s", rid, exc.message)
            details = exc.context
        else:
            logger.info("[%s] %s: %s", rid, exc.kind.value, exc.message)
            details = None

        headers = {}
        if isinstance(exc, RateLimitExceededError):
            headers["Retry-After"] = str(exc.retry_after)
        if exc.kind is ErrorKind.AUTHENTICATION:
            headers["WWW-Authenticate"] = "Bearer"

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.kind, exc.message, request, details),
            headers=headers or None,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        details = {
            "errors": [
                {
                    "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
                    "message": err.get("msg", ""),
                }
                for err in errors
            ]
        }
        message = _validation_message(errors)
        logger.warning("[%s] Request validation failed: %s", _request_id(request), message)
        return JSONResponse(
            status_code=ErrorKind.VALIDATION.status_code,
            content=_error_body(ErrorKind.VALIDATION, message, request, details),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorKind.INTERNAL,
                "An unexpected error occurred. Please try again or contact support.",
                request,
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="XYFORA APIs",
        description=(
            "REST API for the XYFORA web application: account registration and "
            "login with bearer tokens, and per-user product management."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → RateLimit → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(health.router)

    return app


app = create_app()
