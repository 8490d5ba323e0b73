"""Logging setup for the envweave CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from envweave.config import Settings

LOGGER_NAME = "envweave"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(settings: Settings) -> bool:
    """Attach handlers to the package logger.

    Logging stays silent unless ``settings.log_level`` is set. Returns whether
    handlers were installed.
    """
    if not settings.log_level:
        return False

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {settings.log_level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
    )

    if settings.log_file:
        log_file = Path(settings.log_file)
        if log_file.is_dir():
            raise ValueError(f"Log file path {log_file} is a directory, not a file.")
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
    return True
