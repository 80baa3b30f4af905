"""Logging setup for PhotoRenamer."""

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

LOGGER_NAME = "photorenamer"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    use_colors: bool = True,
) -> logging.Logger:
    """
    Set up logging for PhotoRenamer.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        use_colors: Whether to render records through rich

    Returns:
        Root logger for photorenamer
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if use_colors:
        handler: logging.Handler = RichHandler(
            show_time=True,
            show_path=False,
            markup=True,
            rich_tracebacks=True,
        )
        formatter = logging.Formatter("%(message)s")
    else:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(FILE_LOG_FORMAT, datefmt=FILE_LOG_DATEFMT)

    handler.setFormatter(formatter)
    handler.setLevel(numeric_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(FILE_LOG_FORMAT, datefmt=FILE_LOG_DATEFMT)
        )
        file_handler.setLevel(numeric_level)
        logger.addHandler(file_handler)

    return logger
