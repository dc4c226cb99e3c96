#!/usr/bin/env python3
"""Bring the Agora schema up to date before the API starts.

Usage: run_migrations.py [REVISION]   (defaults to "head")
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from agora.config import Settings
from agora.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the database to ``argv[0]``, or to the latest revision."""
    settings = Settings()
    configure_logfire(settings)
    target = argv[0] if argv else "head"

    with logfire.span("run_migrations", target=target, environment=settings.environment):
        try:
            command.upgrade(Config("alembic.ini"), target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The API must not start against a half-migrated schema
            raise

    logfire.info("Database migrated", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
