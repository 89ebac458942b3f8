"""
FastAPI app for citizen feedback: middleware, routers, error handling.
"""

import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from govhub import __version__
from govhub.api.dependencies import cleanup_dependencies
from govhub.api.routes import feedback, health, projects
from govhub.config.settings import get_settings
from govhub.observability.logging import bind_context, clear_context

logger = structlog.get_logger(__name__)


def _incoming_request_id(request: Request) -> str:
    return (
        request.headers.get("X-Request-ID")
        or request.headers.get("X-Correlation-ID")
        or uuid.uuid4().hex
    )


async def request_context_middleware(request: Request, call_next):
    """Bind a request id to the log context and echo it on the response."""
    request_id = _incoming_request_id(request)
    bind_context(request_id=request_id, path=request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request handled",
            method=request.method,
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
    finally:
        clear_context()


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_type": "internal"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and close the database pool, classifier and Redis client on exit."""
    logger.info("GovHub feedback API starting up")

    yield

    logger.info("GovHub feedback API shutting down")
    await cleanup_dependencies()


def create_app() -> FastAPI:
    """
    Build the feedback API from current settings.

    Returns:
        FastAPI app with CORS, request-id middleware and all routers mounted
    """
    settings = get_settings()

    openapi_tags = [
        {"name": "health", "description": "Service health checks"},
        {"name": "feedback", "description": "Citizen feedback and sentiment summaries"},
        {"name": "projects", "description": "Published government projects"},
    ]

    app = FastAPI(
        title="GovHub Feedback API",
        description="""
API for citizen feedback on published government projects.

Each submitted comment is stored, annotated with a short sentiment
summary (Positive, Negative, Neutral, Mixed), and the cached project
and listing views are invalidated.

## Authentication

Requires `X-API-KEY` header for all requests except `/health`.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    # CORS_ORIGINS is comma-separated
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router, tags=["health"])
    app.include_router(feedback.router, tags=["feedback"])
    app.include_router(projects.router, tags=["projects"])

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": "GovHub Feedback API",
            "version": __version__,
            "docs": "/docs",
        }

    return app
