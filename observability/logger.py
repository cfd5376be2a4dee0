"""
Logging Configuration
=====================
Centralized logging setup for the runner.

Features:
- Console and file logging
- Log rotation
- Separate errors-only file
- Structured log format

User-visible behaviour of the runner is entirely through these log lines, so
every decision and outcome goes through a logger obtained from get_logger().
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config import (
    LOG_LEVEL,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_SUBDIR,
    LOGGER_NAME,
    get_data_dir,
)


def setup_logging(
    name: str = LOGGER_NAME,
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    log_to_file: bool = True,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Set up logging for the runner.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files (defaults to <data-dir>/logs)
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console

    Returns:
        Configured logger
    """
    level = (level or LOG_LEVEL).upper()
    numeric_level = getattr(logging, level, logging.INFO)

    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    logger.propagate = False  # Don't double-log to root logger

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Create formatter
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Console handler
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler
    if log_to_file:
        log_dir = log_dir or (get_data_dir() / LOG_SUBDIR)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Log directory unavailable ({log_dir}): {e} - file logging disabled")
            return logger

        # Main log file (rotating)
        log_file = log_dir / f"{name}.log"
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Error log file (separate)
        error_file = log_dir / f"{name}_errors.log"
        error_handler = RotatingFileHandler(
            error_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (e.g., 'orchestration.task_scheduler')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
