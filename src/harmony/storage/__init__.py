"""
Persistence for memos and the user profile.

Backends:
- local: SQLite key-value store (browser local storage equivalent)
- directory: memos.json / profile.json in a user directory
"""

from __future__ import annotations

from harmony.core.config import Config
from harmony.storage.base import MemoStore
from harmony.storage.directory import DirectoryStore
from harmony.storage.local import DB_FILE, LocalStore
from harmony.storage.memos import MemoBook


def open_store(config: Config) -> MemoStore:
    """Create the store selected by `storage.backend` (not yet connected)."""
    if config.storage_backend == "directory":
        return DirectoryStore(config.storage_path)
    return LocalStore(config.storage_path / DB_FILE)


__all__ = [
    "MemoStore",
    "DirectoryStore",
    "LocalStore",
    "MemoBook",
    "open_store",
]
