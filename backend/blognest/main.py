"""
BlogNest Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the DocumentStore, the stores and the services,
       stores them on app.state, and registers middleware, exception
       handlers and routers.
Who:   uvicorn (uvicorn blognest.main:app) and the test suite, which calls
       create_app() with its own Settings and DocumentStore.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────────┐  │
    │  │  Req ID  │→│ Logging  │→│   GZip   │→│    CORS    │  │
    │  └──────────┘ └──────────┘ └──────────┘ └────────────┘  │
    │                                                         │
    │  Routes:                                                │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────────┐  │
    │  │ /api/v1/blog │ │ /api/v1/user │ │ GET /health     │  │
    │  └──────────────┘ └──────────────┘ └─────────────────┘  │
    │                                                         │
    │  Exception Handlers (all return the envelope):          │
    │  ┌───────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ NotFound→404 │        │  │
    │  │ Conflict→409   │ Store→500 │ unexpected→500       │  │
    │  └───────────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create missing tables (db_create_all)
    Shutdown: dispose the engine (close pooled connections)
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
from starlette.exceptions import HTTPException as StarletteHTTPException

from blognest import __version__
from blognest.config import Settings, settings as default_settings
from blognest.database import DocumentStore
from blognest.exceptions import BlogNestError
from blognest.middleware.logging import RequestLoggingMiddleware
from blognest.middleware.request_id import RequestIDMiddleware, request_id_var
from blognest.routes import blog, health, user
from blognest.security import PasswordHasher
from blognest.services import AccountService, BlogService
from blognest.stores import BlogStore, CredentialStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == "DEBUG" else logging.WARNING
    )
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    store: DocumentStore = app.state.store

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("BlogNest Backend %s starting up...", __version__)

    if app_settings.db_create_all:
        await store.create_all()

    logger.info(
        "Server ready at http://%s:%d%s",
        app_settings.backend_host,
        app_settings.backend_port,
        app_settings.api_prefix,
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("BlogNest Backend shutting down...")
    await store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_envelope(
    status_code: int,
    message: str,
    error: str,
    request: Request,
    details: Optional[dict] = None,
) -> JSONResponse:
    content = {
        "success": False,
        "message": message,
        "error": error,
        "request_id": _request_id(request),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers so every failure returns the envelope.

    Handler hierarchy:
        BlogNestError           → exc.status_code (400/401/404/409/500)
        RequestValidationError  → 400 (malformed body or parameters)
        HTTPException           → its own status (unknown route, bad method)
        Exception (fallback)    → 500

    Security: 5xx responses never include exception context; it is logged
    server-side with the request ID instead.
    """

    @app.exception_handler(BlogNestError)
    async def handle_app_error(request: Request, exc: BlogNestError):
        rid = _request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            details = None
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
            details = exc.context or None
        return _error_envelope(exc.status_code, exc.message, exc.error_code, request, details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Never echo `input`: request bodies carry passwords
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body",
                "issue": err.get("msg", "invalid value"),
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", _request_id(request), errors)
        return _error_envelope(
            400,
            "Request validation failed",
            "validation_error",
            request,
            {"fields": sorted({e["field"] for e in errors}), "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        error = "not_found" if exc.status_code == 404 else "http_error"
        return _error_envelope(exc.status_code, str(exc.detail), error, request)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return _error_envelope(
            500,
            "An unexpected error occurred. Please try again later.",
            "internal_server_error",
            request,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-derived settings
        store: Document store; defaults to one built from `settings`

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or default_settings
    store = store or DocumentStore.from_settings(settings)

    app = FastAPI(
        title="BlogNest API",
        description="Blog publishing API: accounts and blog posts with author back-references.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Wire Dependencies ─────────────────────────────────────────────────
    app.state.settings = settings
    app.state.store = store
    app.state.account_service = AccountService(
        CredentialStore(store),
        PasswordHasher(rounds=settings.bcrypt_rounds),
    )
    app.state.blog_service = BlogService(BlogStore(store))

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
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

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(blog.router, prefix=settings.api_prefix)
    app.include_router(user.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


# uvicorn expects `blognest.main:app` to be importable
app = create_app()
