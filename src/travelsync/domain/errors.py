"""
Error taxonomy for TravelSync.

Remote failures are returned inside gateway/coordinator results rather than
raised. ConstraintViolation describes a refused delete; the repository reports
it through a False return value and never raises it to callers.
"""

from __future__ import annotations


class TravelSyncError(Exception):
    """Base class for all TravelSync errors."""


# ============================================================================
# Remote Failures
# ============================================================================

class RemoteFailure(TravelSyncError):
    """Base class for failures talking to the remote API."""


class NetworkUnavailableError(RemoteFailure):
    """No connectivity at call time; no request was attempted."""

    def __init__(self, message: str = "No internet connection"):
        super().__init__(message)


class TransportError(RemoteFailure):
    """Timeout or connection-level failure."""


class RemoteError(RemoteFailure):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"Server returned status code {status_code}")


class DecodingError(RemoteFailure):
    """The response body could not be decoded into the expected shape."""


# ============================================================================
# Local Failures
# ============================================================================

class ConstraintViolation(TravelSyncError):
    """An invariant-guarded delete was refused."""

    def __init__(self, kind: str, entity_id: int, reason: str):
        self.kind = kind
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"Cannot delete {kind} {entity_id}: {reason}")


class InvalidEntityError(TravelSyncError, ValueError):
    """A local write was rejected (unknown owner, bad dates, bad amount...)."""


class StorageError(TravelSyncError):
    """The SQLite store failed unexpectedly."""
