# =============================================================================
# edunexus_core/logging/config.py
# Logging setup for the persistence layer
# =============================================================================

import logging
import sys
import time
from typing import Iterable, Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP transport loggers, chatty at DEBUG
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Route all records to one stream handler, replacing earlier setup.

    Args:
        level: Root level. Fallback warnings show at WARNING, every
            remote/local decision at DEBUG.
        stream: Destination (default: stdout)
        quiet: Loggers held at WARNING whatever ``level`` is
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        force=True,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Times a block and logs its outcome.

    Usage:
        with LogContext(logger, "Bootstrapping storage", level=logging.DEBUG):
            ...
        # "Bootstrapping storage... done in 0.012s"
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.started: Optional[float] = None

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def __enter__(self):
        self.started = time.perf_counter()
        self.logger.log(self.level, f"{self.operation}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation}... done in {self.elapsed:.3f}s")
        else:
            # Failures always surface, even when the block logs at DEBUG
            self.logger.error(f"{self.operation}... failed after {self.elapsed:.3f}s: {exc_val}", exc_info=True)
        return False
