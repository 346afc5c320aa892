"""
Python logging configuration for procjson.

Log Format:
    YYYY-MM-DD HH:MM:SS [LEVEL] Message
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> int:
    """
    Configure root logging for the service.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The numeric level that was applied
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    return log_level
