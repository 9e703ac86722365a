from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Response

from typology.assessments.mbti.catalog import get_parameters
from typology.core.config import settings
from typology.core.logging import configure_logging, correlation_context, get_logger
from typology.core.numeric import safe_round
from typology.engine.strategy_registry import (
    ensure_default_strategies_loaded,
    load_strategies_from_plugins,
    snapshot_strategies,
)
from typology.routers.exceptions import register_exception_handlers
from typology.routers.typology import router as typology_router

CORRELATION_HEADER = "X-Correlation-ID"

configure_logging(environment=settings.environment)
logger = get_logger("typology.app.main", component="app")

_app_start_time = datetime.now(timezone.utc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the instrument and strategies before serving.

    A malformed parameters file fails startup instead of the first request.
    """
    params = get_parameters()
    logger.info(
        "startup_parameters_loaded",
        extra={
            "structured_data": {
                "instrument": params.instrument_id,
                "version": params.version,
                "questions": params.question_count,
            }
        },
    )
    ensure_default_strategies_loaded()
    plugins = load_strategies_from_plugins()
    logger.info(
        "strategy_discovery_complete",
        extra={"structured_data": {"plugins": plugins, "strategies": dict(snapshot_strategies())}},
    )
    yield


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
register_exception_handlers(app)

# Register routers at import time so tests see routes without requiring startup
app.include_router(typology_router)


@app.middleware("http")
async def bind_correlation_id(request: Request, call_next):
    with correlation_context(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


@app.get("/health")
def health():
    """Liveness probe with uptime and the loaded instrument version."""
    now = datetime.now(timezone.utc)
    params = get_parameters()
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
        "started_at": _app_start_time.isoformat(),
        "uptime_seconds": safe_round((now - _app_start_time).total_seconds(), 2),
        "instrument": {"id": params.instrument_id, "version": params.version},
    }


@app.get("/", include_in_schema=False)
def root():
    """Lightweight index to avoid 404s and point to docs."""
    return {
        "name": settings.app_name,
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/favicon.ico", include_in_schema=False)
def favicon():
    """Empty favicon to prevent 404 noise in logs."""
    return Response(status_code=204)
