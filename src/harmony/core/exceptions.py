"""
Custom exceptions for Daily Harmony.

Exception hierarchy:
    HarmonyError (base)
    ├── ConfigurationError
    ├── AuthenticationError
    ├── AdapterError
    │   └── RateLimitError
    ├── StorageError
    │   └── MemoNotFoundError
    └── UnsupportedDateRange
"""

from __future__ import annotations

from typing import Any


class HarmonyError(Exception):
    """Base exception for all Daily Harmony errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details (optional)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(HarmonyError):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Missing config file given explicitly
        - Invalid YAML syntax
        - Unknown storage backend
    """

    pass


class AuthenticationError(HarmonyError):
    """
    Raised when a credential is missing or rejected.

    Examples:
        - ANTHROPIC_API_KEY not set
        - API key rejected by the fortune service
    """

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.service = service

    def __str__(self) -> str:
        if self.service:
            return f"[{self.service}] {self.message}"
        return self.message


class AdapterError(HarmonyError):
    """
    Raised when an external service call fails.

    Examples:
        - Network error
        - API error response
    """

    def __init__(
        self,
        message: str,
        adapter: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.adapter = adapter
        self.status_code = status_code

    def __str__(self) -> str:
        parts = []
        if self.adapter:
            parts.append(f"[{self.adapter}]")
        if self.status_code:
            parts.append(f"HTTP {self.status_code}:")
        parts.append(self.message)
        return " ".join(parts)


class RateLimitError(AdapterError):
    """
    Raised when the service quota or rate limit is exceeded.

    Includes retry information when available.
    """

    def __init__(
        self,
        message: str,
        adapter: str | None = None,
        retry_after: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, adapter=adapter, status_code=429, details=details)
        self.retry_after = retry_after

    def __str__(self) -> str:
        base = super().__str__()
        if self.retry_after:
            return f"{base} (retry after {self.retry_after}s)"
        return base


class StorageError(HarmonyError):
    """
    Raised when persisted memos or profile cannot be read or written.

    Examples:
        - memos.json contains invalid JSON
        - Storage directory not writable
    """

    def __init__(
        self,
        message: str,
        location: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.location = location

    def __str__(self) -> str:
        if self.location:
            return f"{self.message}: {self.location}"
        return self.message


class MemoNotFoundError(StorageError):
    """Raised when a memo id does not exist in the store."""

    def __init__(self, memo_id: str):
        super().__init__(f"Memo not found: {memo_id}", details={"id": memo_id})
        self.memo_id = memo_id

    def __str__(self) -> str:
        return self.message


class UnsupportedDateRange(HarmonyError):
    """
    Raised when a date lies outside the lunar conversion tables.

    Never raised for unrecognized repetition rules or solar-term names;
    those resolve to "not active" and the raw name respectively.
    """

    def __init__(self, value: Any, details: dict[str, Any] | None = None):
        super().__init__(f"Date outside supported lunar range: {value}", details)
        self.value = value
