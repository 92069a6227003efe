"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from privacykb.system.structlog_configurator import configure_structlog
from privacykb.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Context manager for application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]

    # Configure structured logging based on loaded config
    config = container.config()
    configure_structlog(config)

    kb_database = container.kb_database()
    logger.info("Serving knowledge base from %s", kb_database.db_path)

    try:
        yield
    finally:
        logger.info("Shutting down knowledge base service...")
        await kb_database.dispose()
