"""
Campus Market Backend: FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       uvicorn serves the module-level `app`:

           uvicorn campus_market.main:app --host 0.0.0.0 --port 5000

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  /api/scores  /api/announcements  /api/discounts    │
    │  /api/polls   /api/hours  /api/upload  /uploads/*   │
    │  /  /health                                         │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ RequestInvalid/UploadRejected → 400           │  │
    │  │ NotFound → 404                                │  │
    │  │ StorageCorrupt/DataUnavailable/FileStorage →  │  │
    │  │   500                                         │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create DATA_DIR and UPLOAD_DIR
    Shutdown: log only (no pooled resources to release)
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

from campus_market import __version__
from campus_market.config import settings
from campus_market.exceptions import CampusMarketError
from campus_market.middleware.logging import RequestLoggingMiddleware
from campus_market.middleware.request_id import RequestIDMiddleware, request_id_var
from campus_market.routes import (
    announcements,
    discounts,
    health,
    hours,
    polls,
    scores,
    uploads,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure root logging once for the whole application.

    Format: 2025-05-06T09:30:00 [INFO] campus_market.access: POST /api/polls/vote 200 3.1ms [1f3a9c2e] from 10.0.0.7
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("%s %s starting up...", settings.app_name, __version__)

    for directory in (settings.data_path, settings.upload_path):
        directory.mkdir(parents=True, exist_ok=True)
        logger.info("Using directory: %s", directory.resolve())

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("%s shutting down.", settings.app_name)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(message: str, details: Optional[str] = None) -> dict:
    """Error payload shared by every handler: {error, details?, request_id}."""
    body = {"error": message}
    if details:
        body["details"] = details
    body["request_id"] = request_id_var.get("")
    return body


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler table:
        CampusMarketError subclasses → their status_code (400 / 404 / 500)
        RequestValidationError       → 400 "Invalid request data."
        Starlette HTTPException      → its status (unknown route, wrong method)
        Exception (fallback)         → 500 generic message + detail string
    """

    @app.exception_handler(CampusMarketError)
    async def handle_app_error(request: Request, exc: CampusMarketError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | %s", rid, type(exc).__name__, exc.message, exc.details)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = _summarize_validation_errors(exc)
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), details)
        return JSONResponse(
            status_code=400,
            content=error_body("Invalid request data.", details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body("An unexpected error occurred.", str(exc)),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description=(
            "Campus market information service: announcements, discounted products, "
            "polls, business hours, the points scoreboard and image uploads."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(scores.router)
    app.include_router(announcements.router)
    app.include_router(discounts.router)
    app.include_router(polls.router)
    app.include_router(hours.router)
    app.include_router(uploads.router)

    return app


app = create_app()
