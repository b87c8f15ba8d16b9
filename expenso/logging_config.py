"""
Logging configuration for the tracker.

Every module gets its logger through ``setup_logger(__name__)`` so output is
formatted the same way everywhere and the level follows ``LOG_LEVEL``.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from expenso import config


class StructuredFormatter(logging.Formatter):
    """
    Format: [TIMESTAMP] [LEVEL] [MODULE:FUNCTION:LINE] MESSAGE
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        location = f"{record.module}:{record.funcName}:{record.lineno}"
        base_msg = f"[{timestamp}] [{record.levelname:8s}] [{location}] {record.getMessage()}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with structured console output.

    Args:
        name: Logger name (usually __name__)
        level: Log level name. Defaults to config.LOG_LEVEL

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers when a module is re-imported (Streamlit reruns)
    if logger.handlers:
        return logger

    log_level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger
