"""PermitGate — request validation for the hostel permit API.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from permitgate.config import get_settings
from permitgate.api.router import api_router
from permitgate.api.validation import RequestRejected
from permitgate.validators.catalog import list_schemas


def configure_logging() -> None:
    """Configure structured logging once, from settings."""
    settings = get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level if isinstance(level, int) else logging.INFO),
    )


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG)

    # Schemas are validated as they are built; importing the catalog is the check
    logger.info("schema_catalog_loaded", schemas=list_schemas())
    logger.info("validation_options", **settings.validation_options().model_dump())

    logger.info("app_started")

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="PermitGate",
    description=(
        "Request validation for the hostel permit API. "
        "Every operation declares the shape of its input; malformed requests "
        "are rejected with a complete list of violations before any handler runs."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(RequestRejected)
async def request_rejected_handler(request: Request, exc: RequestRejected):
    """Short-circuit a request that failed validation."""
    return JSONResponse(status_code=exc.status_code, content=exc.body)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "PermitGate",
        "version": "1.0.0",
        "description": "Request validation for the hostel permit API",
        "docs": "/docs",
        "health": "/api/v1/health",
        "schemas": "/api/v1/schemas",
    }
