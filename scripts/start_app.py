#!/usr/bin/env python3
"""Serve the Agora API with uvicorn.

Logfire is configured before the app factory runs, so failures while
building the app are reported too.
"""

import sys

import logfire
import uvicorn

from agora.config import Settings
from agora.util.observability import configure_logfire


def main() -> int:
    """Run uvicorn until it exits."""
    settings = Settings()
    configure_logfire(settings)

    logfire.info(
        "Starting API",
        git_sha=settings.git_sha,
        host=settings.api.host,
        port=settings.api.port,
    )
    try:
        uvicorn.run(
            "agora.interface.api.app:create_app",
            factory=True,
            host=settings.api.host,
            port=settings.api.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
