"""
로컬 키-값 저장소

브라우저 localStorage와 같은 방식으로 SQLite 키-값 테이블에
메모(fallback_memos)와 프로필(user_profile)을 JSON 문자열로 저장합니다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import aiosqlite

from harmony.calendar.models import Memo, UserProfile
from harmony.core.exceptions import StorageError
from harmony.storage.base import (
    MemoStore,
    memos_from_json,
    memos_to_json,
    profile_from_json,
    profile_to_json,
)

logger = logging.getLogger(__name__)

DB_FILE = "harmony.db"
MEMOS_KEY = "fallback_memos"
PROFILE_KEY = "user_profile"

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""


class LocalStore(MemoStore):
    """
    SQLite 키-값 저장소

    Example:
        async with LocalStore(Path("~/.harmony/harmony.db")) as store:
            memos = await store.load_all_memos()
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """DB 연결 및 스키마 초기화"""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(str(self.db_path))
            await self._connection.executescript(SCHEMA)
            await self._connection.commit()
        except (OSError, aiosqlite.Error) as e:
            raise StorageError(f"Failed to open local store ({e})", location=str(self.db_path)) from e
        logger.debug("Local store opened: %s", self.db_path)

    async def close(self) -> None:
        """DB 연결 종료"""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if not self._connection:
            raise RuntimeError("Storage not connected. Use 'async with' or call connect() first.")
        return self._connection

    async def get_item(self, key: str) -> Optional[str]:
        """키의 값 (없으면 None)"""
        connection = self._require_connection()
        async with connection.execute("SELECT value FROM kv_store WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()
            return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        """키에 값 저장 (덮어쓰기)"""
        connection = self._require_connection()
        await connection.execute(
            "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)",
            (key, value),
        )
        await connection.commit()

    async def remove_item(self, key: str) -> None:
        connection = self._require_connection()
        await connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        await connection.commit()

    async def load_all_memos(self) -> list[Memo]:
        content = await self.get_item(MEMOS_KEY)
        return memos_from_json(content, f"{self.db_path}#{MEMOS_KEY}")

    async def save_all_memos(self, memos: list[Memo]) -> None:
        await self.set_item(MEMOS_KEY, memos_to_json(memos))
        logger.debug("Saved %d memos to local store", len(memos))

    async def load_profile(self) -> Optional[UserProfile]:
        content = await self.get_item(PROFILE_KEY)
        return profile_from_json(content, f"{self.db_path}#{PROFILE_KEY}")

    async def save_profile(self, profile: UserProfile) -> None:
        await self.set_item(PROFILE_KEY, profile_to_json(profile))
        logger.debug("Saved profile to local store")
