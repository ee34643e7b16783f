"""Loguru sink setup shared by the CLI and API entry points."""

from __future__ import annotations

import sys

from loguru import logger

from config import Settings, get_settings


def configure_logging(settings: Settings | None = None, level: str | None = None) -> None:
    """
    Replace loguru's default sink with the configured ones.

    Args:
        settings: Settings to read log level and file from (defaults to cached settings)
        level: Override for the stderr sink level
    """
    settings = settings or get_settings()
    level = level or settings.log_level

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            level=settings.log_level,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )
