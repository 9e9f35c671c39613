"""Loguru sinks for the periodization engine.

Library modules only ever do ``from loguru import logger``; nothing is
configured at import time. Applications (the CLI, a service embedding the
engine) call ``setup_logger`` once at startup.
"""

import sys
from pathlib import Path

from loguru import logger

from periodization.config.settings import Settings, settings as default_settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def _engine_records_only(record) -> bool:
    return record["name"].startswith("periodization")


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    config: Settings | None = None,
) -> None:
    """Replace loguru's default sink with the engine's console and file sinks.

    Args:
        level: Log level; defaults to ``config.log_level``
        log_file: Optional file path; defaults to ``config.log_file``. The file
            sink only receives records emitted by the engine itself.
        config: Settings providing defaults plus file rotation and retention
    """
    config = config or default_settings
    level = level or config.log_level
    log_file = log_file or config.log_file

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            filter=_engine_records_only,
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="zip",
        )

    logger.debug(f"Logging to stderr at {level}" + (f" and to {log_file}" if log_file else ""))
