"""
Centralized logging configuration for the registration payments service.

Provides plain or structured JSON logging through Loguru. Reconciliation code
binds category, user id and table onto its log records so a failed webhook
can be replayed by hand from the logs alone.
"""

import sys

from loguru import logger


def setup_logging(level: str = "INFO", serialize: bool = False) -> None:
    """
    Configure the process-wide Loguru sink.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        serialize: Emit one JSON document per record instead of text

    Returns:
        None (Loguru configures its own handlers)
    """
    logger.remove()

    logger.add(
        sys.stdout,
        serialize=serialize,
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name} | "
            "{message} | {extra}"
        ),
        level=level.upper(),
        backtrace=True,
        diagnose=False
    )

    logger.debug(f"Logging configured: level={level}, serialize={serialize}")
