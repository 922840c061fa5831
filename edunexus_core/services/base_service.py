# =============================================================================
# edunexus_core/services/base_service.py
# Base Service Class with Common Functionality
# =============================================================================

from __future__ import annotations
from abc import ABC

from edunexus_core.logging import get_logger, LogContext


class BaseService(ABC):
    """
    Abstract base class for all services.

    Provides a per-class logger and timed operation logging.

    Usage:
        class MyService(BaseService):
            async def do_something(self):
                with self.log_operation("Doing something"):
                    ...
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def log_operation(self, operation: str) -> LogContext:
        """
        Create a logging context for an operation.

        Usage:
            with self.log_operation("Building progress table"):
                df = ...
        """
        return LogContext(self.logger, operation)
