"""
Error taxonomy for the catalog sync layer.

Every failure crossing the core boundary is one of these. Coordinators
collapse them into ``UiState.Error`` carrying the message and the kind.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Structured failure kind carried alongside error messages."""

    transport = "transport"
    remote_rejected = "remote_rejected"
    decode = "decode"
    cancelled = "cancelled"
    persistence = "persistence"
    unknown = "unknown"


class CatalogError(Exception):
    """Base error for remote catalog and bookmark store failures."""

    kind: ErrorKind = ErrorKind.unknown

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class TransportError(CatalogError):
    """Unreachable host, connection reset or timeout."""

    kind = ErrorKind.transport


class RemoteRejectedError(CatalogError):
    """Remote API answered with a non-success status."""

    kind = ErrorKind.remote_rejected

    def __init__(self, status_code: int, endpoint: str, message: Optional[str] = None):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(
            message or f"Request to {endpoint} failed with status {status_code}",
            details={"status_code": status_code, "endpoint": endpoint},
        )


class DecodeError(CatalogError):
    """Response payload was not the expected shape."""

    kind = ErrorKind.decode


class PersistenceError(CatalogError):
    """Local bookmark store unavailable or write failed."""

    kind = ErrorKind.persistence
