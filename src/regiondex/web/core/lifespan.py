"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from regiondex.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the shared PokeAPI connection pool for the app's lifetime.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]
    client = container.pokeapi_client()

    logger.info("Starting application services...")
    await client.start()

    try:
        yield
    finally:
        logger.info("Shutting down application services...")
        await client.stop()
