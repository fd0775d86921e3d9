"""
Logging Setup

Console + rotating file logging for the media service and scripts.

Logs to both console and file with rotation:
- Daily rotation
- Keep 7 days of logs
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from config.settings import LOG_DIR, LOG_LEVEL, LOG_SERVICE_FILE


def setup_logging(level: str = LOG_LEVEL, log_to_file: bool = True) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name ("DEBUG", "INFO", ...)
        log_to_file: Also write to a daily-rotated file under LOG_DIR
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s | %(name)s"))
    logger.addHandler(console_handler)

    if not log_to_file:
        return

    file_format = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s | %(name)s",
    )

    log_file = Path(LOG_DIR) / LOG_SERVICE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        # Fallback to local logs directory if LOG_DIR not writable
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / LOG_SERVICE_FILE
        logger.warning(
            f"Cannot write to {log_file}, using fallback: {fallback_log}",
        )

        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(fallback_log),
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )

    file_handler.setLevel(level)
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)
