"""Centralized logging configuration for vodsplit

This module handles:
- Setting up Rich-based console logging
- Writing a timestamped log file per run
- Managing the log level of the ``vodsplit`` logger tree
"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .exceptions import ConfigurationError
from .utils import get_timestamp

LOGGER_NAME = "vodsplit"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> Optional[Path]:
    """Central logging configuration for all modules

    Args:
        log_level: Level name for the ``vodsplit`` logger
        log_dir: Folder for the run's log file, None logs to the console only

    Returns:
        Path of the log file, if one was created

    Raises:
        ConfigurationError: If the log folder or file cannot be created
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level.upper())
    logger.propagate = False

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    log_file = None
    if log_dir is not None:
        log_file = log_dir / f"vodsplit_{get_timestamp()}.log"
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not create log file {log_file}: {e}", module="logging") from e
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
