"""Logging setup.

The editor owns the terminal, so log records never go to stderr while it
runs. When enabled they go to a rotating file in the user log directory;
otherwise the ``quill`` logger discards them.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import platformdirs

LOG_ENV_VAR = "QUILL_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("quill")


def setup_logging(level: Optional[str] = None, log_dir: Optional[Path] = None) -> Optional[Path]:
    """Configure the ``quill`` logger.

    Args:
        level: Level name (DEBUG, INFO, ...). Falls back to the QUILL_LOG
            environment variable; when neither is set logging is disabled.
        log_dir: Directory for quill.log, defaults to the platform log dir

    Returns:
        Path of the log file, or None when logging is disabled.
    """
    level = level or os.environ.get(LOG_ENV_VAR)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not level:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return None

    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    log_dir = log_dir or Path(platformdirs.user_log_dir("quill"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "quill.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
    return log_file
