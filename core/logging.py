"""
Shared Logging System for the greeter bot

Console output follows the usual split: errors go to stderr, everything
else to stdout. An optional rotating file keeps the same records on disk.
"""
import logging
import logging.handlers
import sys
from typing import Optional

from .config import Config

ROOT_LOGGER_NAME = ""

# Event log entries are always echoed, whatever LOG_LEVEL says
JOURNAL_LOGGER_NAME = "core.event_log"


class MaxLevelFilter(logging.Filter):
    """Pass records strictly below ``max_level``"""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def setup_logging(config: Config, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configure console and file handlers once per process.

    Args:
        config: Loaded configuration
        logger_name: Logger to configure (root logger by default)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    level = getattr(logging, str(config.logging["level"]).upper(), logging.INFO)
    logger.setLevel(level)
    logging.getLogger(JOURNAL_LOGGER_NAME).setLevel(logging.INFO)

    if getattr(logger, "_greeter_configured", False):
        return logger

    formatter = logging.Formatter(config.logging["format"])

    # stdout: everything below ERROR
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(MaxLevelFilter(logging.ERROR))
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    # stderr: ERROR and above
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    # File handler with rotation
    log_dir = config.logging["file_path"]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "greeter_bot.log",
            maxBytes=config.logging["max_file_size"],
            backupCount=config.logging["backup_count"],
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # uvicorn installs its own handlers; let its records reach ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True

    logger._greeter_configured = True
    return logger
