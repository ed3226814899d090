"""Application-wide logging configuration."""

import logging
import os
from typing import Optional

from core.utils import get_log_dir

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ENV_LOG_LEVEL = "RETINASCAN_LOG_LEVEL"


def setup_logging(level: Optional[str] = None, log_to_file: bool = True):
    """Configure the root logger for stderr and, optionally, a log file.

    The level comes from the argument, then RETINASCAN_LOG_LEVEL, then INFO.
    """
    level_name = (level or os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    handlers = [logging.StreamHandler()]
    if log_to_file:
        handlers.append(logging.FileHandler(get_log_dir() / "retinascan.log", encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level_name)
