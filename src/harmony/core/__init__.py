"""Core modules for Daily Harmony."""

from harmony.core.config import Config
from harmony.core.exceptions import (
    AdapterError,
    AuthenticationError,
    ConfigurationError,
    HarmonyError,
    MemoNotFoundError,
    RateLimitError,
    StorageError,
    UnsupportedDateRange,
)

__all__ = [
    "Config",
    "HarmonyError",
    "AuthenticationError",
    "AdapterError",
    "RateLimitError",
    "ConfigurationError",
    "StorageError",
    "MemoNotFoundError",
    "UnsupportedDateRange",
]
