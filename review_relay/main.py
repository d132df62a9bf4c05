"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy.engine import make_url

from review_relay.api import notify
from review_relay.config.settings import settings
from review_relay.database.db import check_db_connection, init_db
from review_relay.utils.logging import setup_observability

# Setup logging and observability
setup_observability()
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting Review Relay in {settings.environment} environment")
    missing = settings.missing_required()
    if missing:
        logger.warning(f"Relay is missing configuration: {', '.join(missing)}")
    if settings.maintenance_mode:
        logger.warning("Maintenance mode enabled, review requests will be ignored")

    logger.info("Initializing database...")
    init_db()
    check_db_connection()
    logger.info("Database initialized and connected successfully")

    yield

    logger.info("Shutting down Review Relay")


app = FastAPI(
    title="Review Relay",
    description="Relays pull request review requests to a team chat webhook",
    version=VERSION,
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire if configured
if settings.logfire_token:
    import logfire

    logfire.instrument_fastapi(app)

app.include_router(notify.router)


@app.get("/health")
async def health_check() -> dict[str, str | bool]:
    """Health check endpoint with configuration status."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": VERSION,
        "webhook_configured": bool(settings.slack_webhook_url),
        "relay_secret_configured": bool(settings.relay_secret),
        "category_required": settings.require_category,
        "maintenance_mode": settings.maintenance_mode,
        "logfire_enabled": bool(settings.logfire_token),
    }


@app.get("/database")
async def database() -> dict[str, str | bool]:
    """Database connection health check endpoint."""
    db_connected = check_db_connection()
    return {
        "database_connected": db_connected,
        "database_url": make_url(settings.database_url).render_as_string(
            hide_password=True
        ),
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "message": "Review Relay API",
        "docs": "/docs",
        "health": "/health",
        "database": "/database",
        "relay": notify.router.prefix + "/slack",
    }


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
