"""
Logging configuration for the college-paths project.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records go.
"""

import logging
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "college_paths"

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGING_CONFIGURED = False


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Attach a console handler (and optionally a file handler) to the package logger.

    Safe to call repeatedly, e.g. on every Streamlit rerun; only the first call
    installs handlers, later calls just adjust the level.

    Args:
        level: Minimum level for package records.
        log_file: Optional path that also receives every record.
    """
    global _LOGGING_CONFIGURED

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    if _LOGGING_CONFIGURED:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    _LOGGING_CONFIGURED = True
    return logger
