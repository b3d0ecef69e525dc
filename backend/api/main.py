"""
main.py — University Sports API entry point

The FastAPI application instance lives here. All middleware, routers,
exception handlers, and startup/shutdown events are registered in this file.

Usage
-----
Development (auto-reloads on file save):
    cd backend
    uvicorn api.main:app --reload --port 8000

Production:
    cd backend
    gunicorn api.main:app -c gunicorn.conf.py

Docs (once running):
    http://localhost:8000/docs    — Swagger UI (interactive)
    http://localhost:8000/redoc   — ReDoc (read-only)

Live results:
    ws://localhost:8000/ws/results
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.routers.health import VERSION
from api.routers.health import router as health_router
from api.routers.live import router as live_router
from api.v1.router import v1_router
from core.broadcast import BroadcastChannel
from core.config import settings
from core.errors import AppError, StorageFailure
from core.logging import configure_logging
from core.middleware import RequestIDMiddleware, TimingMiddleware
from db.database import init_db

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: startup and shutdown hooks
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ────────────────────────────────────────────────────────────────
    configure_logging(settings.log_level)
    if settings.create_tables_on_startup:
        init_db()
    logger.info(
        "University Sports API starting",
        extra={
            "environment": settings.environment,
            "version": VERSION,
            "log_level": settings.log_level,
            "allowed_origins": settings.allowed_origins,
            "image_storage": "cloudinary" if settings.cloudinary_configured else "disabled",
        },
    )
    yield
    # ── Shutdown ───────────────────────────────────────────────────────────────
    logger.info(
        "University Sports API shutting down",
        extra={"live_subscribers": app.state.broadcaster.subscriber_count},
    )


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="University Sports API",
    description=(
        "Universities, sports, fixtures, results and users for university "
        "sports events, with live result updates over WebSocket."
    ),
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# One live results channel per process; handlers reach it via get_broadcaster()
app.state.broadcaster = BroadcastChannel()


# ---------------------------------------------------------------------------
# Middleware  (add_middleware order matters: last added = outermost = first to
# handle incoming requests)
#
#   Execution order for a request:
#     CORS → RequestID → Timing → route handler
#   Execution order for a response:
#     route handler → Timing → RequestID → CORS
# ---------------------------------------------------------------------------

# Timing: added first so it runs innermost (after RequestID has set the ID)
app.add_middleware(TimingMiddleware)

# RequestID: stamps request.state.request_id and X-Request-ID header
app.add_middleware(RequestIDMiddleware)

# CORS: outermost so browser preflight OPTIONS requests are handled immediately
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error_response(request: Request, status_code: int, message: str, details=None) -> JSONResponse:
    content = {
        "error": message,
        "status_code": status_code,
        "request_id": getattr(request.state, "request_id", None),
    }
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """NotFound / Validation / Conflict / Storage errors raised by handlers."""
    if isinstance(exc, StorageFailure):
        logger.error(
            "storage failure",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "method": request.method,
                "path": request.url.path,
                "error": exc.message,
                "cause": repr(exc.__cause__) if exc.__cause__ else None,
            },
        )
    return _error_response(request, exc.status_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query/path values. Inputs are not echoed back."""
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return _error_response(request, 422, "Validation failed", details)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return structured JSON for framework HTTP errors (404 unknown route, 405, ...)."""
    return _error_response(request, exc.status_code, exc.detail)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log the traceback, return clean JSON."""
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "unhandled exception",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "error": str(exc),
        },
        exc_info=True,
    )
    return _error_response(request, 500, "Internal server error")


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health_router)            # /health, /health/db  (unversioned)
app.include_router(live_router)              # /ws/results          (unversioned)
app.include_router(v1_router, prefix="/api/v1")


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["root"], summary="API root")
def root():
    """Confirms the API is running. Returns service name, version, docs and live URLs."""
    return {
        "service": "University Sports API",
        "version": VERSION,
        "docs":    "/docs",
        "live":    "/ws/results",
    }
