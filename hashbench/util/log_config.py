"""
Logging configuration for the hash benchmark harness.

Provides centralized logging setup with clean, concise terminal output.
Loggers are never used inside a timed loop; they report around it.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

_LOGGER_PREFIX = "hashbench"


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: INFO)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    # Console handler: [LEVEL] message
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt='[%(levelname)s] %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        file_formatter = logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def configure_package_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """
    Re-apply level (and optional file output) to every hashbench logger
    created so far. Used by the CLI for --verbose and the config log_file.
    """
    for name in list(logging.root.manager.loggerDict):
        if name == _LOGGER_PREFIX or name.startswith(_LOGGER_PREFIX + "."):
            setup_logger(name, level=level, log_file=log_file)
