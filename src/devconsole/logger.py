"""
Logging setup. Logs go to a file under the data directory so they never
interleave with console output on the terminal.
"""

import logging
from pathlib import Path
from typing import Optional

from devconsole.runtime_config import DEFAULT_LOG_LEVEL, get_data_dir

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_FILE_NAME = "devconsole.log"


def setup_logging(level: str = DEFAULT_LOG_LEVEL, log_dir: Optional[Path] = None) -> Path:
    """Configure the ``devconsole`` logger to write to a file; returns the log path."""
    log_dir = log_dir or get_data_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logger = logging.getLogger("devconsole")
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level.upper())
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

    return log_file
