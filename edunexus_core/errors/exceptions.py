# =============================================================================
# edunexus_core/errors/exceptions.py
# Custom Exception Hierarchy for EduNexus Core
# =============================================================================

from typing import Optional, Dict, Any


class EduNexusError(Exception):
    """
    Base exception for all EduNexus Core errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "REMOTE_001")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "EN_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# REMOTE BACKEND EXCEPTIONS
# =============================================================================

class BackendUnavailable(EduNexusError):
    """Raised on transport failure or a non-2xx response from the backend"""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if endpoint:
            details["endpoint"] = endpoint
        if status_code is not None:
            details["status_code"] = status_code

        super().__init__(
            message=message,
            code="REMOTE_001",
            details=details,
            **kwargs,
        )


class MalformedResponse(EduNexusError):
    """Raised when a backend payload cannot be decoded"""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if endpoint:
            details["endpoint"] = endpoint

        super().__init__(
            message=message,
            code="REMOTE_002",
            details=details,
            **kwargs,
        )


# =============================================================================
# DATA LAYER EXCEPTIONS
# =============================================================================

class RecordDecodeError(EduNexusError):
    """Raised when a wire dictionary does not match a record shape"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        field: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if record_type:
            details["record_type"] = record_type
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            code="DATA_001",
            details=details,
            **kwargs,
        )


# =============================================================================
# LOCAL STORE EXCEPTIONS
# =============================================================================

class LocalStoreCorrupt(EduNexusError):
    """A stored collection exists but is not valid JSON; treated as absent"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key

        super().__init__(
            message=message,
            code="LOCAL_001",
            details=details,
            **kwargs,
        )


class LocalStoreWriteFailure(EduNexusError):
    """The local persistence medium rejected a write. Nothing sits below it."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key

        super().__init__(
            message=message,
            code="LOCAL_002",
            details=details,
            recoverable=False,
            **kwargs,
        )


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(EduNexusError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        source: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if source:
            details["source"] = source

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )
