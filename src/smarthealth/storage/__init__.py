"""
Local persistence for the client session.

A pluggable async key-value backend (local files by default) plus the two
helpers built on it: the auth token/user store and the onboarding flags.
"""

from smarthealth.core.exceptions import StorageError, StorageKeyError, StoragePermissionError

from .auth import TOKEN_KEY, USER_KEY, AuthStore
from .base import KeyValueStore, MemoryKeyValueStore
from .local import LocalKeyValueStore
from .onboarding import OnboardingStore, notif_key

__all__ = [
    "TOKEN_KEY",
    "USER_KEY",
    "AuthStore",
    "KeyValueStore",
    "LocalKeyValueStore",
    "MemoryKeyValueStore",
    "OnboardingStore",
    "StorageError",
    "StorageKeyError",
    "StoragePermissionError",
    "notif_key",
]
