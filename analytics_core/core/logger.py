"""Loguru sinks for analytics core records.

The core only emits records. A host that already configures loguru receives
them through its own sinks. A host that wants a dedicated destination calls
add_log_sinks, which attaches sinks filtered to analytics_core records and
returns their handler ids so remove_log_sinks can detach exactly those.
Sinks the host registered are never touched.
"""

import sys
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

CORE_LOGGER_NAME = "analytics_core"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def add_log_sinks(
    level: str = "INFO",
    log_file: str | None = None,
    console: bool = True,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> list[int]:
    """Attach stderr and/or rotating file sinks for analytics_core records.

    Args:
        level: Minimum level for the added sinks
        log_file: Optional path of a rotating log file
        console: Whether to add a colorized stderr sink
        rotation: File rotation trigger (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept (e.g. "7 days")

    Returns:
        Handler ids of the sinks added by this call
    """
    handler_ids: list[int] = []

    if console:
        handler_ids.append(
            logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, filter=CORE_LOGGER_NAME, colorize=True)
        )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(
            logger.add(
                log_path,
                format=FILE_FORMAT,
                level=level,
                filter=CORE_LOGGER_NAME,
                rotation=rotation,
                retention=retention,
                compression="zip",
            )
        )

    logger.info(f"[LOGGING] Added {len(handler_ids)} analytics sink(s) at level={level}")
    return handler_ids


def add_log_sinks_from_settings(log_file: str | None = None, console: bool = True) -> list[int]:
    """Attach analytics sinks at ANALYTICS_LOG_LEVEL."""
    from analytics_core.config.settings import settings  # noqa: PLC0415

    return add_log_sinks(level=settings.log_level, log_file=log_file, console=console)


def remove_log_sinks(handler_ids: Iterable[int]) -> None:
    for handler_id in handler_ids:
        logger.remove(handler_id)
