import os
import sys
from typing import Optional

from loguru import logger

from dnsdirect.core.constants import LOG_FILE

STDERR_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# Configure logger
logger.remove()  # Remove default handler

# Add stderr handler only if available
if sys.stderr:
    logger.add(sys.stderr, format=STDERR_FORMAT, level="WARNING")


def setup_logging(level: str = "INFO", log_file: Optional[str] = LOG_FILE) -> None:
    """
    Reconfigure loguru for a CLI run.

    Args:
        level: Minimum level for the stderr handler
        log_file: Rotating debug log, or None to skip file logging
    """
    logger.remove()
    if sys.stderr:
        logger.add(sys.stderr, format=STDERR_FORMAT, level=level.upper())

    if not log_file:
        return

    try:
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        logger.add(
            log_file,
            rotation="1 MB",
            retention="10 days",
            format=FILE_FORMAT,
            level="DEBUG",
        )
    except OSError as e:
        # An unwritable log directory must not stop DNS teardown
        logger.warning(f"File logging disabled, cannot use {log_file}: {e}")
