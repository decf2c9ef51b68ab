"""Logging setup: console output mirrored into a rotating file under the data directory."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

from utils.constants import APP_NAME

LOG_LEVEL_ENV_VAR = "SVE_TRACKER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(level: str | None = None) -> str:
    """Explicit level, then the environment override, then INFO."""
    candidate = (level or os.getenv(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).strip().upper()
    try:
        logger.level(candidate)
    except ValueError:
        return DEFAULT_LOG_LEVEL
    return candidate


def configure_logging(logs_dir: Path, level: str | None = None) -> Path | None:
    """
    Configure loguru to emit to stderr and a rolling file in ``logs_dir``.

    Returns the file path in use when file logging is available, otherwise None.
    """
    level = resolve_log_level(level)
    logger.remove()
    if sys.stderr is not None:
        # Windowed builds have no stderr
        logger.add(sys.stderr, level=level, backtrace=True, diagnose=True, enqueue=True)

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f"{APP_NAME}_{datetime.now():%Y%m%d_%H%M%S}.log"
        logger.add(
            log_file,
            level=level,
            rotation="5 MB",
            retention=10,
            backtrace=True,
            diagnose=True,
            enqueue=True,
        )
    except OSError as exc:
        logger.warning(f"File logging disabled; unable to write to {logs_dir}: {exc}")
        return None

    logger.debug(f"Logging to {log_file} at {level}")
    return log_file
