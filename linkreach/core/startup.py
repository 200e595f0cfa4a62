"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from linkreach.core.config import Config, get_config
from linkreach.core.logging_config import configure_logging
from linkreach.database.db import Database

logger = logging.getLogger(__name__)


def validate_startup_config(database: Database, config: Config | None = None) -> None:
    """Fail-fast config and connectivity checks."""
    config = config or get_config()
    database_ok = database.verify_connection()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if config.is_production and database.url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )
    for key in ("ANTHROPIC_API_KEY", "APOLLO_API_KEY", "SCRAPINGDOG_API_KEY"):
        if not getattr(config, key):
            logger.warning(
                "startup.integration.unconfigured",
                extra={"event": "startup.integration.unconfigured", "setting": key},
            )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": database.url.split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
        },
    )


def bootstrap(database: Database, config: Config | None = None) -> None:
    """Initialize logging, validate runtime configuration and prepare the schema."""
    config = config or get_config()
    configure_logging(config)
    validate_startup_config(database, config)
    if config.DB_AUTO_CREATE:
        database.create_all()
        logger.info("startup.database.tables_created", extra={"event": "startup.database.tables_created"})
