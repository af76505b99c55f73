"""
Logging setup for the maps-bridge application.

One named logger is shared by the converter, the providers and the HTTP
client. The console shows progress; the log file keeps the per-request detail
(redirect hops and fallback results).
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "maps_bridge"
DEFAULT_LOG_FILE = "logs/maps_bridge.log"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(module)s:%(lineno)d | %(message)s"
CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(value: Union[str, int], default: int) -> int:
    """Resolve a level name ("debug", "WARNING") or number."""
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


def setup_logger(
    name: str = LOGGER_NAME,
    log_file: Optional[str] = None,
    log_level: Union[str, int] = "INFO",
    console_level: Union[str, int] = logging.INFO
) -> logging.Logger:
    """
    Configure the application logger.

    Calling it again replaces the handlers, so the last call wins.

    Args:
        name: Logger name
        log_file: Log file path. If None, uses LOG_FILE env var or logs/maps_bridge.log
        log_level: Level of the logger itself (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_level: Minimum level echoed to the console; the file gets everything
            the logger lets through

    Returns:
        Configured logger instance
    """
    log_path = Path(log_file or os.getenv("LOG_FILE") or DEFAULT_LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(_level(log_level, logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_level(console_level, logging.INFO))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    # Records stop here; the root logger may belong to an embedding application
    logger.propagate = False

    return logger


class LoggerContext:
    """Logs the start, duration and outcome of one conversion."""

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        """
        Initialize logger context.

        Args:
            logger: Logger instance
            operation: Description used in the messages
            level: Level of the start and completion messages; failures are
                always logged as warnings
        """
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[datetime] = None
        self.duration: Optional[float] = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.log(self.level, f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = (datetime.now() - self.start_time).total_seconds()

        if exc_type is not None:
            self.logger.warning(
                f"Failed {self.operation} after {self.duration:.2f}s "
                f"({exc_type.__name__}: {exc_val})"
            )
            return False

        self.logger.log(self.level, f"Completed {self.operation} in {self.duration:.2f}s")
        return False
