#!/usr/bin/env python3
"""Apply database migrations, logging failures to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from greyn.config import Settings
from greyn.util.logging import setup_logging
from greyn.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the schema to ``revision``."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", revision=revision)
        command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so a deploy never starts against a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
