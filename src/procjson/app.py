"""procjson - service entry point."""

import logging
import sys

import uvicorn

from procjson.config import Settings
from procjson.errors import ConfigError
from procjson.logging_config import setup_logging
from procjson.server import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    """Entry point for the procjson service."""
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    log_level = setup_logging(settings.log_level)
    logger.info(
        f"Listening on http://{settings.bind_address} "
        f"(procfs: {settings.proc_root}, policy: {settings.scan_policy.value})"
    )

    # uvicorn stops accepting connections on SIGINT/SIGTERM and waits for
    # in-flight requests before returning
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=log_level,
    )
    logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
