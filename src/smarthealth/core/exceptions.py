"""
smarthealth exception hierarchy.

All smarthealth exceptions inherit from SmartHealthError, so callers can catch
library-level errors while still telling transport, validation and storage
failures apart.
"""


class SmartHealthError(Exception):
    """Base exception class for all smarthealth errors."""


class ConfigurationError(SmartHealthError):
    """Raised for configuration errors (missing keys, invalid values)."""


class APIError(SmartHealthError):
    """Raised when a backend request fails (network, timeout, non-2xx)."""

    def __init__(self, message: str, *, status: int | None = None, path: str = ""):
        super().__init__(message)
        self.message = message
        self.status = status
        self.path = path


class AuthenticationError(APIError):
    """Raised when the backend rejects the bearer token or credentials."""


class ValidationError(SmartHealthError):
    """Raised for client-side input checks that run before any request."""


class StorageError(SmartHealthError):
    """Base exception for local key-value storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when a storage operation is not permitted (unsafe key, permissions)."""
