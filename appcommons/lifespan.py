"""FastAPI lifespan wiring for the database manager."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from .db.connection import DatabaseManager
from .log_config import configure_logging


logger = logging.getLogger(__name__)


def create_lifespan(manager: DatabaseManager, configure_logs: bool = True):
    """Build a lifespan that opens the pool on startup and closes it on shutdown.

    The manager is exposed to request handlers as ``app.state.db``.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logs:
            configure_logging(manager.settings)
        logger.info(f"Starting {manager.settings.app_name}")

        try:
            await manager.get_pool()
            await manager.verify()
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

        app.state.db = manager
        yield

        logger.info(f"Shutting down {manager.settings.app_name}")
        try:
            await manager.close()
        except Exception as e:
            logger.error(f"Error during shutdown: {e}")

    return lifespan


def get_database_manager(request: Request) -> DatabaseManager:
    """Dependency returning the application's database manager."""
    return request.app.state.db
