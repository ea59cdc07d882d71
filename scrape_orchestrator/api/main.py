"""FastAPI application entry point."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from scrape_orchestrator.api.routes import admin, health
from scrape_orchestrator.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging()
    logger.info("scrape_orchestrator_starting")
    yield
    logger.info("scrape_orchestrator_stopping")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Artist Scrape Orchestrator",
        description="Launches, polls and reports social profile scrapes for artists.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(admin.router)

    return app


app = create_app()
