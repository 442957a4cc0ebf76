#!/usr/bin/env python3
"""
EduConfig - Logging Setup
Lublin University of Technology

Configures the application log. Everything goes to a rotating log file so a
silent run deployed by a script can still be diagnosed afterwards.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from src.config.settings import (
    LOG_BACKUP_COUNT,
    LOG_FILE,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_LOG_SIZE_MB,
)

ROOT_LOGGER_NAME = "src"


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure the package logger once

    Args:
        debug: Log DEBUG messages and mirror them to stderr
        log_dir: Directory for the log file, the default log directory if None

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Avoid duplicate handlers if called again, e.g. from tests
    if getattr(logger, "_educonfig_configured", False):
        return logger

    if log_dir is None:
        from src.utils.system_utils import PathManager

        log_dir = PathManager.get_log_dir()

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        Path(log_dir) / LOG_FILE,
        maxBytes=MAX_LOG_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if debug:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    logger.setLevel(logging.DEBUG if debug else getattr(logging, LOG_LEVEL))
    logger._educonfig_configured = True
    return logger
