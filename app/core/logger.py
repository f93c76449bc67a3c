"""Loguru sinks for the Disciplin OS API.

Every module logs through ``from loguru import logger`` with keyword context,
e.g. ``logger.info("fuel: Report stored", user_id=..., score=...)``. The context
is rendered after the message through ``{extra}``.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> {extra}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message} {extra}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "20 MB",
    retention: str = "14 days",
) -> None:
    """Replace loguru's default sink with the API sinks.

    Args:
        level: Minimum level for every sink
        log_file: Also write to this file (rotated and compressed) when set
        rotation: Size or age at which the file is rotated
        retention: How long rotated files are kept
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="gz",
            enqueue=True,
            diagnose=False,
        )

    logger.info("Logging configured", log_level=level, log_file=log_file or "-")
