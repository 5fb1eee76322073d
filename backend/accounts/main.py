"""Accounts API: process entry point.

Invariants:
    - Exit 0 only after a graceful shutdown
    - Exit 1 on configuration failure, bootstrap failure, bind failure, or crash
    - SIGINT/SIGTERM set the stop event; RestServer does the draining
    - Container closed on every path once built

Design Decisions:
    - Logger created here and injected into container and server
      (ADR: no module reaches for a global logging sink at startup)
"""

import asyncio
import logging
import signal
import sys

from accounts.config import Settings, get_settings
from accounts.container import build_container
from accounts.core.errors import AccountsError, ConfigurationError
from accounts.infrastructure.observability import setup_logging
from accounts.infrastructure.server import RestServer

logger = logging.getLogger("accounts")


async def serve(settings: Settings, stop: asyncio.Event | None = None) -> None:
    """Build the container and serve until stopped. Raises AccountsError on failure."""
    stop = stop or asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    try:
        container = build_container(settings, logger)
        try:
            server = RestServer(
                container.router,
                port=settings.app_port,
                host=settings.app_host,
                grace_period=settings.shutdown_grace_seconds,
                logger=logger,
            )
            await server.run(stop)
        finally:
            container.close()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


def main() -> int:
    try:
        settings = get_settings()
    except ConfigurationError as e:
        setup_logging()
        logger.critical(f"config error: {e.message}", extra={"error_code": e.code})
        return 1

    setup_logging(settings.log_level, settings.log_format)
    try:
        asyncio.run(serve(settings))
    except AccountsError as e:
        logger.critical(e.message, extra={"error_code": e.code})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
