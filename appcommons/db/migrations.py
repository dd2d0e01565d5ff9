"""Schema migration through alembic."""

import asyncio
import logging
from typing import Dict

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from ..config import Settings
from ..errors.exceptions import MigrationError


logger = logging.getLogger(__name__)

# SQLAlchemy driver used by alembic for each supported dialect
MIGRATION_DRIVERS: Dict[str, str] = {
    "postgresql": "postgresql+asyncpg",
}


def migration_database_url(settings: Settings) -> str:
    """Translate the configured connection URL for the migration engine."""
    try:
        driver = MIGRATION_DRIVERS[settings.db_dialect]
    except KeyError:
        raise MigrationError(f"No migration driver for dialect '{settings.db_dialect}'")
    url = make_url(settings.database_url).set(drivername=driver)
    return url.render_as_string(hide_password=False)


def build_alembic_config(settings: Settings) -> Config:
    """Create an alembic config pointing at the configured script directory."""
    if not settings.migration_source:
        raise MigrationError("Migration is enabled but no migration source is configured")

    alembic_config = Config()
    alembic_config.set_main_option("script_location", settings.migration_source)
    # ConfigParser interpolation treats '%' specially
    alembic_config.set_main_option(
        "sqlalchemy.url", migration_database_url(settings).replace("%", "%%")
    )
    return alembic_config


def upgrade_to_head(settings: Settings) -> None:
    """Apply all pending migrations; already being at head is not an error."""
    alembic_config = build_alembic_config(settings)
    logger.info(f"Running migrations from {settings.migration_source}")
    command.upgrade(alembic_config, "head")
    logger.info("Migrations applied")


async def run_migration(settings: Settings) -> None:
    """Run the schema migration when enabled.

    Alembic is synchronous and its async environment drives its own event
    loop, so it runs in a worker thread.

    Raises:
        MigrationError: If the migration is misconfigured or fails
    """
    if not settings.migration_enabled:
        logger.debug("Migration disabled, skipping")
        return

    try:
        await asyncio.to_thread(upgrade_to_head, settings)
    except MigrationError:
        raise
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        raise MigrationError(f"Migration failed: {e}") from e
