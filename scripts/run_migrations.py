#!/usr/bin/env python3
"""Upgrade the Gouache schema, reporting failures to Logfire.

Usage: run_migrations.py [revision]   (defaults to head)
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from gouache.config import Settings
from gouache.util.logging import setup_logging
from gouache.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    """Upgrade to the requested revision.

    A failure is re-raised so the deploy stops before the API starts
    against a half-migrated schema.
    """
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    revision = argv[1] if len(argv) > 1 else "head"
    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config(str(ALEMBIC_INI)), revision)
        except Exception as e:
            logfire.error(
                "Schema migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Schema migrated", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
