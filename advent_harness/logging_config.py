"""
Logging configuration for the advent harness.

Sets up loguru with appropriate levels and formatting. Solution output goes to
stdout, so the stderr sink stays quiet (WARNING) unless asked otherwise.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger


def setup_logging(
    level: str = "WARNING",
    debug: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """
    Configure loguru logging.

    Args:
        level: Log level for stderr (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        debug: If True, enable debug logging on every sink
        log_file: Optional path of a rotating log file
    """
    # Remove default handler
    logger.remove()

    log_level = "DEBUG" if debug else level

    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>",
    )

    if log_file is not None:
        logger.add(
            str(log_file),
            level="DEBUG" if debug else "INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="7 days",
        )


def get_logger(name: str | None = None) -> Any:
    """
    Get a logger instance.

    Args:
        name: Optional name for the logger (defaults to calling module)

    Returns:
        Logger instance
    """
    if name:
        return logger.bind(name=name)
    return logger
