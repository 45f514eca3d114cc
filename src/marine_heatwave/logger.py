"""
Logging for marine heatwave runs.

One application logger writes a short console stream and a detailed log
file. Per-site messages are tagged with the site name, and timed operations
report a result summary when they complete.
"""

import logging
import os
import time
from pathlib import Path
from typing import Any, MutableMapping, Optional, Tuple, Union

DEFAULT_LOG_FILE = "logs/marine_heatwave.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def setup_logger(
    name: str = "marine_heatwave",
    log_file: Optional[str] = None,
    log_level: str = "INFO"
) -> logging.Logger:
    """
    Configure the application logger.

    The console never shows DEBUG output (dropped rows and cells are logged
    at DEBUG and would flood it); the file receives everything.

    Args:
        name: Logger name
        log_file: Log file path. Falls back to LOG_FILE, then DEFAULT_LOG_FILE
        log_level: Logger level name; unknown names mean INFO

    Returns:
        Configured logger
    """
    log_path = Path(log_file or os.getenv("LOG_FILE", DEFAULT_LOG_FILE))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(max(level, logging.INFO))
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    logger.addHandler(console)

    log_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    log_handler.setLevel(logging.DEBUG)
    log_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    logger.addHandler(log_handler)

    logger.propagate = False
    return logger


class SiteLogAdapter(logging.LoggerAdapter):
    """Prefix messages with the observation site they concern."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['site']}] {msg}", kwargs


def site_logger(logger: logging.Logger, site: str) -> SiteLogAdapter:
    """Wrap a logger so every message names ``site``."""
    return SiteLogAdapter(logger, {"site": site})


class LoggerContext:
    """
    Time an operation and log its start, outcome and duration.

    Set ``summary`` inside the block to append a result description to the
    completion message, e.g. ``"3 events"``. Exceptions are logged with a
    traceback and re-raised.
    """

    def __init__(self, logger: Union[logging.Logger, logging.LoggerAdapter], operation: str):
        self.logger = logger
        self.operation = operation
        self.summary: Optional[str] = None
        self._started: Optional[float] = None

    @property
    def elapsed(self) -> float:
        """Seconds since the block was entered."""
        if self._started is None:
            return 0.0
        return time.perf_counter() - self._started

    def __enter__(self) -> "LoggerContext":
        self._started = time.perf_counter()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation} after {self.elapsed:.2f}s: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb)
            )
            return None

        outcome = f": {self.summary}" if self.summary else ""
        self.logger.info(f"Completed {self.operation} in {self.elapsed:.2f}s{outcome}")
        return None
