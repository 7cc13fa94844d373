"""FastAPI application entry point for adaptive-scraper-service.

Configures middleware, exception handlers, lifecycle hooks, and routes.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adaptive_scraper import __version__
from adaptive_scraper.core.build_info import SERVICE_NAME
from adaptive_scraper.core.config import settings
from adaptive_scraper.core.container import get_container, shutdown_container
from adaptive_scraper.routes import api, health
from adaptive_scraper.routes.headers import router as headers_router
from adaptive_scraper.routes.rule_sets import router as rule_sets_router
from adaptive_scraper.routes.tools import router as tools_router

# ---------------------------------------------------------------------------
# Logging Configuration
# ---------------------------------------------------------------------------

# Configure root logger with level from settings
logging.basicConfig(
    level=settings.get_log_level_int(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup / shutdown lifecycle."""
    # --- Startup ---
    logger.info(
        "Starting adaptive-scraper-service (env=%s, port=%d)",
        settings.service_env,
        settings.port,
    )
    container = get_container()
    logger.info(
        "Loaded %d rule set(s) and headers for %d domain(s)",
        len(container.rule_engine.list_names()),
        len(container.header_store.list_domains()),
    )

    yield

    # --- Shutdown ---
    logger.info("Shutting down adaptive-scraper-service")
    # The browser is launched on first use; closing it here is a no-op otherwise
    await shutdown_container()


# ---------------------------------------------------------------------------
# App instance
# ---------------------------------------------------------------------------

app = FastAPI(
    title="adaptive-scraper API",
    version=__version__,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log every request with method, path, status, and duration."""
    start = time.monotonic()
    response = await call_next(request)
    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler that returns a structured JSON error."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
            }
        },
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

# Health check at /health (no prefix)
app.include_router(health.router)

# API v1 routes
app.include_router(api.router, prefix="/api/v1")

# Tool routes (prefixed with /api/v1/tools)
app.include_router(tools_router)

# Rule set routes (prefixed with /api/v1/rule-sets)
app.include_router(rule_sets_router)

# Domain header routes (prefixed with /api/v1/headers)
app.include_router(headers_router)


# Additional health endpoint under API prefix for consistency
@app.get("/api/v1/health", tags=["health"])
async def api_health_check():
    """Health check under the /api/v1 prefix."""
    return {
        "status": "ok",
        "name": SERVICE_NAME,
        "version": __version__,
        "environment": settings.service_env,
    }


def run() -> None:
    """Console-script entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "adaptive_scraper.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
