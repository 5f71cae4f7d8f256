#!/usr/bin/env python3
"""Serve the Gouache activation API under uvicorn."""

import sys
import logfire
import uvicorn

from gouache.config import Settings
from gouache.util.logging import setup_logging
from gouache.util.observability import configure_logfire


def main() -> int:
    """Run uvicorn, reporting startup failures to Logfire before exiting."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting Gouache API",
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
    try:
        # create_app builds its own container from the environment
        uvicorn.run(
            "gouache.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            proxy_headers=settings.environment != "development",
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Gouache API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
