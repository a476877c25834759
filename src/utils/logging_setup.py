"""Logging configuration with file rotation support.

Provides centralized logging setup with optional file output and rotation.

Log Level Precedence (deterministic resolution order):
1. CLI/explicit parameter (log_level argument to setup_logging)
2. Environment variable (APP_LOG_LEVEL)
3. Config defaults (config.app.log_level from config.py)
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from utils.config import get_config

logger = logging.getLogger(__name__)

LOG_FILE_PREFIX = "iss_flyover_"
LOG_RETENTION_COUNT = 7
LOG_MAX_BYTES = 5 * 1024 * 1024


def resolve_log_level(log_level: str | None = None) -> str:
    """Resolve the effective log level name using the precedence order."""
    if log_level:
        return log_level.upper()
    env_level = os.environ.get("APP_LOG_LEVEL")
    if env_level:
        return env_level.upper()
    return get_config().app.log_level


def setup_logging(
    log_level: str | None = None,
    user_data_dir: Path | None = None,
    log_to_file: bool | None = None,
) -> None:
    """Configure application logging with optional file output and rotation.

    Args:
        log_level: Explicit logging level override (highest priority).
        user_data_dir: Directory for log files (defaults to config user_data_dir).
        log_to_file: Whether to add a rotating file handler (defaults to
            config.app.log_to_file).
    """
    config = get_config()

    resolved_level = resolve_log_level(log_level)
    numeric_level = getattr(logging, resolved_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    # Console handler goes to stderr so stdout stays reserved for results
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    if log_to_file is None:
        log_to_file = config.app.log_to_file

    if log_to_file:
        if user_data_dir is None:
            user_data_dir = config.app.user_data_dir

        log_dir = user_data_dir / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{LOG_FILE_PREFIX}{timestamp}.log"
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_RETENTION_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

        _cleanup_old_logs(log_dir, LOG_RETENTION_COUNT)

        logger.info("Logging to file: %s", log_file)

    logger.info("Logging configured with level: %s", resolved_level)


def _cleanup_old_logs(log_dir: Path, keep_count: int) -> None:
    """Remove old log files, keeping only the most recent ones.

    Args:
        log_dir: Directory containing log files.
        keep_count: Number of most recent log files to keep.
    """
    try:
        log_files = sorted(
            log_dir.glob(f"{LOG_FILE_PREFIX}*.log*"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
    except OSError as e:
        logger.warning("Failed to list old log files: %s", e)
        return

    for log_file in log_files[keep_count:]:
        try:
            log_file.unlink()
            logger.debug("Deleted old log file: %s", log_file)
        except OSError as e:
            logger.warning("Failed to delete old log file %s: %s", log_file, e)
