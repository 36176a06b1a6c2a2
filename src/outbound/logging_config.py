"""
Logging configuration for outbound.

Console logging by default, with an optional rotating log file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "outbound"


class StructuredFormatter(logging.Formatter):
    """Pipe-separated formatter carrying module and function names."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'module_name'):
            record.module_name = record.module
        if not hasattr(record, 'function_name'):
            record.function_name = record.funcName

        return super().format(record)


def default_log_path(log_dir: str | None = None) -> Path:
    """Log file location under log_dir, or ~/.outbound/logs."""
    if log_dir:
        return Path(log_dir) / "outbound.log"
    return Path.home() / ".outbound" / "logs" / "outbound.log"


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_dir: str | None = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    enable_console: bool = True,
    enable_file: bool = False,
) -> logging.Logger:
    """
    Set up the "outbound" logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Custom log file path (overrides log_dir)
        log_dir: Directory for log files (defaults to ~/.outbound/logs)
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep
        enable_console: Log to stderr
        enable_file: Log to a rotating file

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logger.level)
        console_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if enable_file:
        log_path = Path(log_file) if log_file else default_log_path(log_dir)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)-20s | %(module_name)-10s | '
                '%(function_name)-12s | %(lineno)-4d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module, e.g. 'outbound.http.client'."""
    return logging.getLogger(name)


def configure_logging(
    debug: bool = False,
    log_to_file: bool = False,
    log_file: str | None = None,
) -> logging.Logger:
    """
    Quick setup: DEBUG or INFO to the console, optionally to file.

    Giving log_file turns file logging on; log_to_file alone writes to
    the default location.
    """
    return setup_logging(
        level="DEBUG" if debug else "INFO",
        log_file=log_file,
        enable_console=True,
        enable_file=log_to_file or log_file is not None,
    )
