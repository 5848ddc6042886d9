"""Logging configuration for hanzidrill."""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "hanzidrill"


def setup_logger(
    name: str = LOGGER_NAME,
    log_file: str | Path | None = None,
    level: int | str = logging.INFO,
) -> logging.Logger:
    """
    Set up and return a configured logger.

    Args:
        name: Logger name
        log_file: Optional log file path. Without one only the console handler is installed.
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        logger.debug(f"Log file: {log_path}")

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger under the hanzidrill namespace.

    Args:
        name: Logger name; dotted module names such as ``hanzidrill.loader`` nest
            under the package logger configured by :func:`setup_logger`.

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
