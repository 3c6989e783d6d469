"""
디렉토리 저장소

사용자가 지정한 폴더에 memos.json, profile.json 파일로 저장합니다.
파일이 없으면 빈 데이터로 간주합니다.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

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

MEMOS_FILE = "memos.json"
PROFILE_FILE = "profile.json"


class DirectoryStore(MemoStore):
    """
    JSON 파일 디렉토리 저장소

    Example:
        async with DirectoryStore(Path("~/Documents/harmony")) as store:
            await store.save_all_memos(memos)
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    async def connect(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot use directory ({e})", location=str(self.directory)) from e

    def _read(self, name: str) -> Optional[str]:
        path = self.directory / name
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read ({e})", location=str(path)) from e

    def _write(self, name: str, content: str) -> None:
        path = self.directory / name
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp_path.write_text(content, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Failed to write ({e})", location=str(path)) from e

    async def load_all_memos(self) -> list[Memo]:
        content = await asyncio.to_thread(self._read, MEMOS_FILE)
        return memos_from_json(content, str(self.directory / MEMOS_FILE))

    async def save_all_memos(self, memos: list[Memo]) -> None:
        await asyncio.to_thread(self._write, MEMOS_FILE, memos_to_json(memos))
        logger.debug("Saved %d memos to %s", len(memos), self.directory)

    async def load_profile(self) -> Optional[UserProfile]:
        content = await asyncio.to_thread(self._read, PROFILE_FILE)
        return profile_from_json(content, str(self.directory / PROFILE_FILE))

    async def save_profile(self, profile: UserProfile) -> None:
        await asyncio.to_thread(self._write, PROFILE_FILE, profile_to_json(profile))
        logger.debug("Saved profile to %s", self.directory)
