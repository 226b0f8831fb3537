"""Backend client: authenticated transport plus per-endpoint wrappers."""

from .client import ApiClient
from .health import CHAT_APOLOGY, HealthApi

__all__ = [
    "CHAT_APOLOGY",
    "ApiClient",
    "HealthApi",
]
