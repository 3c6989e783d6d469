"""
Daily Harmony - Korean lunar calendar and personal journal.

Month calendars annotated with Korean public holidays, lunar dates and the
24 solar terms, dated memos with recurrence and reminders, biorhythm and an
AI-generated daily fortune.
"""

__version__ = "1.0.0"

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
from harmony.cli.main import cli

__all__ = [
    "__version__",
    "Config",
    "HarmonyError",
    "AuthenticationError",
    "AdapterError",
    "RateLimitError",
    "ConfigurationError",
    "StorageError",
    "MemoNotFoundError",
    "UnsupportedDateRange",
    "cli",
]
