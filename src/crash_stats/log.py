"""
loguru sink setup: stderr at the configured level plus a rotating file in LOG_DIR.
"""

import os
import sys
from typing import Optional

from loguru import logger

from config import settings

LOG_FILE_NAME = "crash_stats.log"


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> str:
    """Replace loguru's default sink. Returns the log file path."""
    level = level or settings.LOG_LEVEL
    log_dir = log_dir or settings.LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, LOG_FILE_NAME)

    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(log_path, level=level, rotation="10 MB", retention=5, encoding="utf-8")
    return log_path
