"""Logging setup for vadumpcaps: diagnostics on stderr, optional rotating file"""

import logging
import logging.handlers
import sys
from pathlib import Path

VERBOSITY_LEVELS = ("WARNING", "INFO", "DEBUG")


def level_for_verbosity(base_level: str, verbosity: int) -> str:
    """
    Lower a configured level by one step per -v flag.

    Args:
        base_level: Configured level name.
        verbosity: Number of -v flags given.

    Returns:
        The more verbose of base_level and the level implied by verbosity.
    """
    if verbosity <= 0:
        return base_level
    requested = VERBOSITY_LEVELS[min(verbosity, len(VERBOSITY_LEVELS) - 1)]
    base = getattr(logging, base_level.upper(), logging.WARNING)
    if getattr(logging, requested) < base:
        return requested
    return base_level


def setup_logging(
    log_level: str = "WARNING",
    log_file_name: str | None = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Set up logging for the vadumpcaps command.

    This configures logging to write to:
    - Console (stderr), since stdout carries the capability document
    - File with rotation, when log_file_name is given

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file_name: Path to log file (can be absolute or relative)
        max_bytes: Maximum size of log file before rotation (default 10MB)
        backup_count: Number of backup files to keep (default 5)
        log_format: Custom log format string for the file handler

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_file_name:
        log_file_path = Path(log_file_name)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(
            log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging initialized - Level: {log_level}")
    if log_file_name:
        root_logger.debug(f"Log file: {log_file_name}")

    return root_logger

