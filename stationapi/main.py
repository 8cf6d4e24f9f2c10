"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as redis
import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from stationapi import __version__
from stationapi.api import railway
from stationapi.core.cache import close_cache
from stationapi.core.config import settings
from stationapi.core.database import dispose_engine, get_engine
from stationapi.core.exceptions import (
    InconsistentDataError,
    InvalidInputError,
    NotFoundError,
    ProviderError,
    StationApiError,
)
from stationapi.core.logging import configure_logging
from stationapi.core.telemetry import get_tracer_provider, shutdown_tracer_provider
from stationapi.middleware import AccessLoggingMiddleware
from stationapi.schemas.railway import HealthResponse

# Configure logging at module level so Uvicorn startup logs go through structlog pipeline
configure_logging(log_level=settings.LOG_LEVEL)

logger = structlog.get_logger(__name__)

ERROR_STATUS_CODES: dict[type[StationApiError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidInputError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InconsistentDataError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ProviderError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(error: StationApiError) -> int:
    """Map an error kind to its HTTP status code (500 for unknown kinds)."""
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - initialize OTEL TracerProvider and check the database on startup."""
    # TracerProvider is created here (after fork) so each worker gets its own BatchSpanProcessor
    if settings.OTEL_ENABLED and (provider := get_tracer_provider()):
        trace.set_tracer_provider(provider)
        logger.info("otel_tracer_provider_initialized")

    # Skip database validation in DEBUG mode (tests use in-memory repositories)
    if not settings.DEBUG:
        logger.info("startup_initializing", message="validating database")
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("startup_failed", error=str(e))
            raise
        logger.info("database_connection_successful")
    else:
        logger.info("debug_mode_startup", message="skipping database validation")

    logger.info("startup_complete")

    yield

    logger.info("shutdown_starting")
    if settings.OTEL_ENABLED:
        shutdown_tracer_provider()
    await close_cache()
    await dispose_engine()
    logger.info("shutdown_complete")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Railway stations, lines and companies read API",
    version=__version__,
    lifespan=lifespan,
)

# Instrumentor wraps the ASGI application to create HTTP request spans
if settings.OTEL_ENABLED:
    FastAPIInstrumentor().instrument_app(
        app,
        excluded_urls=",".join(settings.OTEL_EXCLUDED_URLS),
    )
    logger.info("otel_fastapi_instrumented", excluded_urls=settings.OTEL_EXCLUDED_URLS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.add_middleware(AccessLoggingMiddleware)

app.include_router(railway.router, prefix=settings.API_V1_PREFIX)


@app.exception_handler(StationApiError)
async def station_api_error_handler(request: Request, exc: StationApiError) -> JSONResponse:
    """Translate error kinds into status codes, keeping the kind in the body."""
    status_code = status_code_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness check endpoint - verify the database and, when used, Redis."""
    checks: dict[str, str] = {}

    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("readiness_check_failed", dependency="database", error=str(e))
        checks["database"] = "unavailable"

    if settings.CACHE_BACKEND == "redis" and settings.REDIS_URL:
        client = redis.from_url(settings.REDIS_URL)  # type: ignore[no-untyped-call]
        try:
            await client.ping()
            checks["redis"] = "ok"
        except (redis.RedisError, OSError) as e:
            logger.warning("readiness_check_failed", dependency="redis", error=str(e))
            checks["redis"] = "unavailable"
        finally:
            await client.aclose()

    ready = all(value == "ok" for value in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
