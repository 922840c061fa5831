# =============================================================================
# edunexus_core/errors/__init__.py
# Centralized Error Handling for EduNexus Core
# =============================================================================

from .exceptions import (
    EduNexusError,
    BackendUnavailable,
    MalformedResponse,
    RecordDecodeError,
    LocalStoreCorrupt,
    LocalStoreWriteFailure,
    ConfigurationError,
)

from .handlers import handle_error

# Every failure the failover path absorbs by falling back to the local store
REMOTE_FAILURES = (BackendUnavailable, MalformedResponse, RecordDecodeError)

__all__ = [
    # Exceptions
    "EduNexusError",
    "BackendUnavailable",
    "MalformedResponse",
    "RecordDecodeError",
    "LocalStoreCorrupt",
    "LocalStoreWriteFailure",
    "ConfigurationError",
    "REMOTE_FAILURES",
    # Handlers
    "handle_error",
]
