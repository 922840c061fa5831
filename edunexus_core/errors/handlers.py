# =============================================================================
# edunexus_core/errors/handlers.py
# Error Handling Utilities for EduNexus Core
# =============================================================================

from __future__ import annotations
import logging
import traceback
from typing import Any, Dict, Optional

from edunexus_core.logging import get_logger
from .exceptions import EduNexusError

logger = get_logger(__name__)


def handle_error(
    error: Exception,
    level: int = logging.ERROR,
    context: Optional[str] = None,
    log: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Centralized error logging.

    Args:
        error: The exception to handle
        level: Log level to record it at
        context: Short description of the operation that failed
        log: Logger to write to (defaults to this module's logger)

    Returns:
        The error as a dictionary (see ``EduNexusError.to_dict``)
    """
    if isinstance(error, EduNexusError):
        info = error.to_dict()
    else:
        info = {
            "error_type": error.__class__.__name__,
            "code": "UNKNOWN",
            "message": str(error),
            "details": {"traceback": traceback.format_exc()},
            "recoverable": True,
        }

    prefix = f"{context}: " if context else ""
    (log or logger).log(
        level,
        f"{prefix}[{info['code']}] {info['message']}",
        extra={"details": info["details"]},
        exc_info=level >= logging.ERROR,
    )
    return info
